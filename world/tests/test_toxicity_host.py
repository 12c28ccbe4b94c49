import gc
import unittest
from unittest.mock import MagicMock

from toxicity import events
from toxicity.conf import ToxicitySettings
from toxicity.handler import ToxicityHandler
from toxicity.severity import tier_for_roll
from toxicity.thresholds import ThresholdTable
from world.global_tick import TICK, send_tick
from world.mechanics.toxicity_host import CharacterHost, is_potion, toxicity_value
from world.system import state_manager


class DummyTags:
    def __init__(self):
        self.tags = set()

    def add(self, key, category=None):
        self.tags.add((key, category))

    def remove(self, key, category=None):
        self.tags.discard((key, category))

    def has(self, key, category=None):
        return (key, category) in self.tags


class DummyChar:
    def __init__(self, id=1, key="Hero", hp=20, level=1):
        self.id = id
        self.key = key
        self.hp = hp
        self.db = type("DB", (), {})()
        self.db.level = level
        self.tags = DummyTags()
        self.location = None
        self.msg = MagicMock()


class DamageableChar(DummyChar):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.at_damage = MagicMock(return_value=4)


class DummyItem:
    def __init__(self, toxicity=None, consumable_type="potion"):
        self.db = type("DB", (), {})()
        self.db.toxicity = toxicity
        self.db.consumable_type = consumable_type


class ScriptedRandom:
    def __init__(self, *values):
        self.values = list(values)

    def roll(self, expression):
        return self.values.pop(0)


class TestItemHelpers(unittest.TestCase):
    def test_toxicity_value(self):
        self.assertEqual(toxicity_value(DummyItem(3)), 3)
        self.assertEqual(toxicity_value(DummyItem(None)), 0)
        self.assertEqual(toxicity_value(DummyItem("bad")), 0)
        self.assertEqual(toxicity_value(object()), 0)

    def test_is_potion(self):
        self.assertTrue(is_potion(DummyItem(1, "Potion")))
        self.assertFalse(is_potion(DummyItem(1, "food")))


class TestCharacterHost(unittest.TestCase):
    def setUp(self):
        self.char = DummyChar()
        self.host = CharacterHost()
        self.host.register(self.char)

    def test_ledger_values_stored_on_character(self):
        self.assertIsNone(self.host.read_ledger_value(1))
        self.host.persist_ledger_value(1, 4)
        self.assertEqual(self.char.db.current_toxicity, 4)
        self.assertEqual(self.host.read_ledger_value(1), 4)

    def test_unknown_character(self):
        with self.assertRaises(LookupError):
            self.host.get(99)

    def test_lookup_fallback_is_cached(self):
        other = DummyChar(id=2)
        lookup = MagicMock(return_value=other)
        host = CharacterHost(lookup=lookup)
        self.assertIs(host.get(2), other)
        self.assertIs(host.get(2), other)
        lookup.assert_called_once_with(2)

    def test_apply_round_and_indefinite_effects(self):
        self.host.apply_status_effects(1, tier_for_roll(12).effects)
        self.assertIsNone(self.char.db.status_effects["unconscious"])
        self.assertIsNone(self.char.db.status_effects["poisoned"])
        self.host.apply_status_effects(1, tier_for_roll(10).effects)
        self.assertEqual(self.char.db.status_effects["prone"], 1)
        self.assertIsNone(self.char.db.status_effects["unconscious"])

    def test_apply_impairment_mods(self):
        self.host.apply_status_effects(1, tier_for_roll(4).effects)
        self.assertEqual(
            state_manager.get_effect_mods(self.char),
            {"ability_checks": -1, "attack_rolls": -1},
        )
        self.assertEqual(self.char.db.active_effects["mild_impairment"]["duration"], 60)

    def test_damage_lowers_hp_with_resistance(self):
        self.char.db.resistances = ["poison"]
        dealt = self.host.apply_damage(1, 9, "poison")
        self.assertEqual(dealt, 4)
        self.assertEqual(self.char.hp, 16)

    def test_lethal_damage_knocks_out(self):
        self.host.apply_damage(1, 50)
        self.assertEqual(self.char.hp, 0)
        self.assertTrue(self.char.tags.has("unconscious", category="status"))

    def test_damage_delegates_to_at_damage(self):
        char = DamageableChar(id=3)
        self.host.register(char)
        self.assertEqual(self.host.apply_damage(3, 7, "poison"), 4)
        char.at_damage.assert_called_once_with(None, 7, damage_type="poison")

    def test_narrate_prefers_room(self):
        self.host.narrate(1, "hello")
        self.char.msg.assert_called_once_with("hello")
        self.char.location = MagicMock()
        self.host.narrate(1, "room")
        self.char.location.msg_contents.assert_called_once_with("room")

    def test_warn_messages_character(self):
        self.host.warn(1, "bad table")
        self.assertIn("bad table", self.char.msg.call_args.args[0])
        self.host.warn(99, "nobody")

    def test_registry_drops_deleted_characters(self):
        self.host.register(DummyChar(id=5))
        gc.collect()
        self.assertNotIn(5, self.host.characters)
        del self.char
        gc.collect()
        self.assertEqual(len(self.host.characters), 0)


class TestCharacterHostEvents(unittest.TestCase):
    def setUp(self):
        self.char = DummyChar(level=5)
        self.host = CharacterHost()
        self.handler = ToxicityHandler(
            self.host,
            settings=ToxicitySettings(thresholds=ThresholdTable({1: 3, 4: 4, 8: 5})),
            rng=ScriptedRandom(3),
        )
        events.connect_handler(self.handler)

    def tearDown(self):
        events.disconnect_handler(self.handler)

    def test_drinking_potion_overflows(self):
        self.host.consume(self.char, DummyItem(5))
        self.assertEqual(self.char.db.current_toxicity, 5)
        self.assertIn("mild_impairment", self.char.db.active_effects)
        texts = [call.args[0] for call in self.char.msg.call_args_list]
        self.assertEqual(texts[0], "Hero consumed a potion, increasing toxicity to 5.")
        self.assertIn("Result (4): Mild Impairment", texts[1])

    def test_non_potions_ignored(self):
        self.assertEqual(self.host.consume(self.char, DummyItem(5, "food")), [])
        self.assertEqual(self.host.consume(self.char, DummyItem(0)), [])
        self.assertIsNone(getattr(self.char.db, "current_toxicity", None))

    def test_long_rest_resets(self):
        self.char.db.current_toxicity = 7
        self.host.rest(self.char)
        self.assertEqual(self.char.db.current_toxicity, 0)

    def test_short_rest_keeps_toxicity(self):
        self.char.db.current_toxicity = 7
        self.host.rest(self.char, long_rest=False)
        self.assertEqual(self.char.db.current_toxicity, 7)


class TestCharacterHostTick(unittest.TestCase):
    def setUp(self):
        self.char = DummyChar()
        self.host = CharacterHost()
        self.host.register(self.char)
        TICK.connect(self.host.on_tick)

    def tearDown(self):
        TICK.disconnect(self.host.on_tick)

    def test_one_round_poison_expires_after_one_tick(self):
        self.host.apply_status_effects(1, tier_for_roll(6).effects)
        self.assertTrue(self.char.tags.has("poisoned", category="status"))
        send_tick()
        self.assertNotIn("poisoned", self.char.db.status_effects)
        self.assertFalse(self.char.tags.has("poisoned", category="status"))

    def test_tick_keeps_longer_and_indefinite_effects(self):
        self.host.apply_status_effects(1, tier_for_roll(4).effects)
        self.host.apply_status_effects(1, tier_for_roll(12).effects)
        send_tick()
        self.assertEqual(self.char.db.active_effects["mild_impairment"]["duration"], 59)
        self.assertIsNone(self.char.db.status_effects["unconscious"])
        self.assertIsNone(self.char.db.status_effects["poisoned"])

    def test_critical_impairment_clears_after_one_tick(self):
        self.host.apply_status_effects(1, tier_for_roll(10).effects)
        send_tick()
        for status in ("unconscious", "prone", "poisoned"):
            self.assertFalse(self.char.tags.has(status, category="status"))

import unittest

from toxicity import events
from toxicity.conf import ToxicitySettings
from toxicity.handler import ToxicityHandler
from toxicity.ledger import MemoryLedgerStore
from toxicity.thresholds import ThresholdTable


class ScriptedRandom:
    def __init__(self, *values):
        self.values = list(values)

    def roll(self, expression):
        return self.values.pop(0)


class WarningHost(MemoryLedgerStore):
    def __init__(self):
        super().__init__()
        self.narrated = []
        self.warnings = []

    def narrate(self, entity_id, text):
        self.narrated.append(text)

    def apply_status_effects(self, entity_id, effects):
        pass

    def apply_damage(self, entity_id, amount, damage_type):
        pass

    def warn(self, entity_id, text):
        self.warnings.append((entity_id, text))


class TestSignalWiring(unittest.TestCase):
    def setUp(self):
        self.host = WarningHost()
        self.handler = ToxicityHandler(
            self.host,
            settings=ToxicitySettings(thresholds=ThresholdTable({1: 3})),
            rng=ScriptedRandom(),
        )
        events.connect_handler(self.handler)

    def tearDown(self):
        events.disconnect_handler(self.handler)

    def test_consumed_signal_increments(self):
        responses = events.potion_consumed.send(
            sender=None, entity_id="hero", toxicity_value=2, entity_level=1
        )
        (_, result), = responses
        self.assertEqual(result.total, 2)
        self.assertEqual(self.host.values["hero"], 2)

    def test_rest_signal_resets(self):
        self.host.values["hero"] = 3
        events.rest_completed.send(sender=None, entity_id="hero", long_rest=True)
        self.assertEqual(self.host.values["hero"], 0)

    def test_errors_are_reported_not_raised(self):
        events.potion_consumed.send(
            sender=None, entity_id="hero", toxicity_value=-1, entity_level=1
        )
        self.assertEqual(len(self.host.warnings), 1)
        self.assertEqual(self.host.warnings[0][0], "hero")
        self.assertNotIn("hero", self.host.values)

    def test_connect_twice_keeps_one_receiver(self):
        events.connect_handler(self.handler)
        events.potion_consumed.send(
            sender=None, entity_id="hero", toxicity_value=1, entity_level=1
        )
        self.assertEqual(self.host.values["hero"], 1)

    def test_disconnect(self):
        events.disconnect_handler(self.handler)
        responses = events.potion_consumed.send(
            sender=None, entity_id="hero", toxicity_value=1, entity_level=1
        )
        self.assertEqual(responses, [])

from types import SimpleNamespace

from django.test import SimpleTestCase, override_settings

from toxicity.conf import DEFAULT_ROLL_TABLE, load_settings
from toxicity.errors import ConfigurationError


class TestLoadSettings(SimpleTestCase):
    def test_project_settings(self):
        conf = load_settings()
        self.assertEqual(conf.thresholds.limit_for(5), 4)
        self.assertTrue(conf.reset_on_long_rest)
        self.assertEqual(conf.roll_table, DEFAULT_ROLL_TABLE)

    @override_settings(
        TOXICITY_LEVELS={"1": 2, "10": 9},
        TOXICITY_RESET_ON_LONG_REST=False,
        TOXICITY_ROLL_TABLE=" Bitter Draughts ",
    )
    def test_overridden_settings(self):
        conf = load_settings()
        self.assertEqual(conf.thresholds.as_dict(), {1: 2, 10: 9})
        self.assertFalse(conf.reset_on_long_rest)
        self.assertEqual(conf.roll_table, "Bitter Draughts")

    @override_settings(TOXICITY_LEVELS={})
    def test_empty_levels_rejected(self):
        with self.assertRaises(ConfigurationError):
            load_settings()

    @override_settings(TOXICITY_RESET_ON_LONG_REST="yes")
    def test_flag_must_be_bool(self):
        with self.assertRaises(ConfigurationError):
            load_settings()

    @override_settings(TOXICITY_ROLL_TABLE="")
    def test_roll_table_must_be_named(self):
        with self.assertRaises(ConfigurationError):
            load_settings()

    def test_defaults_for_missing_attributes(self):
        conf = load_settings(SimpleNamespace())
        self.assertEqual(conf.thresholds.limit_for(20), 8)
        self.assertTrue(conf.reset_on_long_rest)

    def test_bad_level_values(self):
        with self.assertRaises(ConfigurationError):
            load_settings(SimpleNamespace(TOXICITY_LEVELS={1: 0}))

    @override_settings(TOXICITY_LEVELS=None)
    def test_missing_levels_rejected(self):
        with self.assertRaises(ConfigurationError):
            load_settings()

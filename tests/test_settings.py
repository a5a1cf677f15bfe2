import unittest

from chess_vault.errors import ConfigurationError
from chess_vault.settings import ENV_K_FACTOR, ENV_MOVE_ID_LENGTH, Settings


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        s = Settings.from_env({})
        self.assertEqual(s.k_factor, 20.0)
        self.assertEqual(s.move_id_length, 20)

    def test_env_overrides(self):
        s = Settings.from_env({ENV_K_FACTOR: "40", ENV_MOVE_ID_LENGTH: " 12 "})
        self.assertEqual(s.k_factor, 40.0)
        self.assertEqual(s.move_id_length, 12)

    def test_blank_values_ignored(self):
        self.assertEqual(Settings.from_env({ENV_K_FACTOR: ""}), Settings())

    def test_invalid_values(self):
        cases = (
            {ENV_K_FACTOR: "fast"},
            {ENV_K_FACTOR: "0"},
            {ENV_K_FACTOR: "-10"},
            {ENV_MOVE_ID_LENGTH: "3"},
            {ENV_MOVE_ID_LENGTH: "12.5"},
        )
        for env in cases:
            with self.subTest(env=env):
                with self.assertRaises(ConfigurationError):
                    Settings.from_env(env)


if __name__ == "__main__":
    unittest.main()

import unittest

from sharemirror.compose import (
    LiteralEnv,
    SecretRefEnv,
    env_from_mapping,
    render_env,
    required_secrets,
)
from sharemirror.errors import ConfigError


class TestEnv(unittest.TestCase):
    def test_render_literal_and_secret(self) -> None:
        rendered = render_env(
            [
                LiteralEnv("DB_USERNAME", "difyroot"),
                SecretRefEnv("DB_PASSWORD", "postgres-db-password"),
            ]
        )
        self.assertEqual(
            rendered,
            [
                {"name": "DB_USERNAME", "value": "difyroot"},
                {"name": "DB_PASSWORD", "secretRef": "postgres-db-password"},
            ],
        )

    def test_duplicate_names_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            render_env([LiteralEnv("A", "1"), SecretRefEnv("A", "s")])

    def test_empty_name_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            render_env([LiteralEnv("", "1")])

    def test_required_secrets(self) -> None:
        env = [
            SecretRefEnv("DB_PASSWORD", "pg"),
            SecretRefEnv("PGVECTOR_PASSWORD", "pg"),
            LiteralEnv("MODE", "api"),
            SecretRefEnv("REDIS_PASSWORD", "redis"),
        ]
        self.assertEqual(required_secrets(env), ["pg", "redis"])

    def test_env_from_mapping(self) -> None:
        env = env_from_mapping(
            {"MODE": "api", "DEBUG": False, "PORT": 5001, "DB_PASSWORD": {"secret": "pg"}}
        )
        self.assertEqual(
            env,
            [
                LiteralEnv("MODE", "api"),
                LiteralEnv("DEBUG", "false"),
                LiteralEnv("PORT", "5001"),
                SecretRefEnv("DB_PASSWORD", "pg"),
            ],
        )

    def test_env_from_mapping_bad_secret(self) -> None:
        with self.assertRaises(ConfigError):
            env_from_mapping({"X": {"name": "oops"}})

    def test_env_from_mapping_bad_type(self) -> None:
        with self.assertRaises(ConfigError):
            env_from_mapping({"X": [1, 2]})


if __name__ == "__main__":
    unittest.main()

import os


def _get_env(name, default=""):
    return os.getenv(name, default).strip()


DISCORD_TOKEN = _get_env("DISCORD_TOKEN")
XGD_API_KEY = _get_env("XGD_API_KEY")
NOTIFY_TOKEN = _get_env("NOTIFY_TOKEN")
LOG_LEVEL = _get_env("LOG_LEVEL", "INFO").upper()


def missing_settings() -> list[str]:
    """Liste des secrets obligatoires absents de l'environnement."""
    required = {
        "DISCORD_TOKEN": DISCORD_TOKEN,
        "XGD_API_KEY": XGD_API_KEY,
        "NOTIFY_TOKEN": NOTIFY_TOKEN,
    }
    return [name for name, value in required.items() if not value]

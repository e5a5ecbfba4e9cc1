"""
Config file loading for linux-tools.

Reads ~/.config/linux-tools/config.toml and returns structured config.
Never raises — always returns a valid dict with sensible defaults.
"""

from pathlib import Path

_CONFIG_PATH = Path.home() / ".config" / "linux-tools" / "config.toml"

DEFAULTS: dict = {
    "ref": "main",
    "language": None,
    "target_user": None,
    "repo_owner": "owq-1777",
    "repo_name": "linux-tools",
}

_LANGUAGES = ("zh", "en")


def load_config(path: Path | None = None) -> dict:
    """
    Load and return linux-tools config from TOML file.

    Missing file, parse errors, or bad shapes all return defaults.
    Each key is validated on its own: one wrongly-typed value does not
    discard the rest of the file.
    """
    config_path = path or _CONFIG_PATH
    config = dict(DEFAULTS)

    if not config_path.is_file():
        return config

    try:
        raw = config_path.read_bytes()
    except OSError:
        return config

    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore[no-redef]
        except ModuleNotFoundError:
            return config

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except Exception:
        return config

    for key in ("ref", "target_user", "repo_owner", "repo_name"):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            config[key] = value.strip()

    language = data.get("language")
    if isinstance(language, str) and language.strip().lower() in _LANGUAGES:
        config["language"] = language.strip().lower()

    return config

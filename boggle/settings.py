import os
from dataclasses import dataclass, field
from pathlib import Path

from boggle.loader import LoadOptions


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    NTFY_TOPIC: str = ""
    NTFY_URL: str = "https://ntfy.sh"

    MIN_WORD_LENGTH: int = 3
    MAX_RESULTS: int = 50
    GAME_DURATION_SECONDS: int = 180
    FINISHED_GAME_TTL_SECONDS: int = 600

    EXCLUDE_ALL_CAPS: bool = True
    EXCLUDE_PROPER_NOUNS: bool = True
    EXCLUDE_PUNCTUATED: bool = True
    REQUIRE_VOWEL: bool = False

    DEBUG: bool = False

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))

    def load_options(self) -> LoadOptions:
        return LoadOptions(
            min_length=self.MIN_WORD_LENGTH,
            exclude_all_caps=self.EXCLUDE_ALL_CAPS,
            exclude_proper_nouns=self.EXCLUDE_PROPER_NOUNS,
            exclude_punctuated=self.EXCLUDE_PUNCTUATED,
            require_vowel=self.REQUIRE_VOWEL,
        )


def _coerce(current, value):
    if value is None:
        raise TypeError("value must not be null")
    # bool before int: bool is a subclass of int
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("1", "true", "yes")
    if isinstance(current, int):
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, Path):
        return Path(value)
    return str(value)


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_RESULTS": int,
    "GAME_DURATION_SECONDS": int,
    "FINISHED_GAME_TTL_SECONDS": int,
    "NTFY_TOPIC": str,
    "DEBUG": bool,
}


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values; returns per-field errors, valid fields are still applied."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            if hasattr(cfg, name):
                errors[name] = "not editable"
            else:
                errors[name] = "unknown setting"
            continue
        try:
            setattr(cfg, name, _coerce(getattr(cfg, name), value))
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
    return errors


settings = Settings()

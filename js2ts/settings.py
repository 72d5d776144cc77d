from typing import List, Optional

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

# Directory created next to (or inside) the input when no output is given.
OUTPUT_DIR_NAME = "ts-output"

# Always excluded when discovering sources in a directory.
DEFAULT_IGNORE: tuple[str, ...] = (
    "node_modules/**",
    "**/*.d.ts",
    "**/*.min.js",
    "**/dist/**",
)

# Excluded when discovering declaration files.
DECLARATION_IGNORE: tuple[str, ...] = (
    "node_modules/**",
    "**/dist/**",
)

DECLARATION_SUFFIX = ".d.ts"

# Source suffix -> generated suffix.
SOURCE_SUFFIXES: dict[str, str] = {
    ".js": ".ts",
    ".jsx": ".tsx",
}


class ConversionSettings(BaseSettings):
    """Options for one JavaScript → TypeScript conversion run."""

    model_config = SettingsConfigDict(env_prefix="JS2TS_")

    input: str = Field(description="Input file or directory to convert.")
    output: Optional[str] = Field(
        None,
        description=(
            "Root directory for generated files. Defaults to a "
            f"'{OUTPUT_DIR_NAME}' directory inside the input directory, or "
            "next to the input file."
        ),
    )
    overwrite: bool = Field(False, description="Overwrite existing output files.")
    strict: bool = Field(True, description="Emit TypeScript intended for strict mode.")
    ignore: List[str] = Field(
        default_factory=list,
        description="Extra gitignore-style patterns excluded from source discovery.",
    )
    keep_original: bool = Field(
        True, description="Keep the original JavaScript files after conversion."
    )
    verbose: bool = Field(False, description="Log diagnostic progress messages.")


def load_settings(
    env_prefix: Optional[str] = None,
    env_file: Optional[str] = None,
    toml_file: Optional[str] = None,
    json_file: Optional[str] = None,
    **kwargs,
) -> ConversionSettings:
    """
    Build ``ConversionSettings`` from keyword overrides, the environment and
    optional dotenv / TOML / JSON files.
    """
    config_dict = SettingsConfigDict(
        env_prefix=env_prefix if env_prefix is not None else "JS2TS_",
        env_file=env_file,
        toml_file=toml_file,
        json_file=json_file,
    )

    class Settings(ConversionSettings):
        model_config = config_dict

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls,
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ):
            return (
                init_settings,
                env_settings,
                dotenv_settings,
                TomlConfigSettingsSource(settings_cls),
                JsonConfigSettingsSource(settings_cls),
            )

    return Settings(**kwargs)

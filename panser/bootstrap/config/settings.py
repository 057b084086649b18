from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from panser.bootstrap.config.loader import get_configfile
from panser.core.codecs.registry import Format
from panser.core.errors import PanserError


class PanserSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PANSER_",
        extra="ignore"
    )

    log_level: Annotated[
        str,
        Field(
            description=(
                "Logging verbosity, one of DEBUG, INFO, WARNING, ERROR, CRITICAL.\n"
                "Logs are written to stderr so they never mix with the data stream."
            ),
            default="WARNING"
        )
    ]

    default_from: Annotated[
        str,
        Field(
            description=(
                "Input format used when neither --from nor the first input file's\n"
                "extension names one."
            ),
            default="json"
        )
    ]

    default_to: Annotated[
        str,
        Field(
            description=(
                "Output format used when neither --to nor the output file's\n"
                "extension names one."
            ),
            default="msgpack"
        )
    ]

    chunk_size: Annotated[
        int,
        Field(
            description="Maximum number of bytes requested from an input per read.",
            default=64 * 1024,
            gt=0
        )
    ]

    max_frame_size: Annotated[
        int,
        Field(
            description=(
                "Largest sized or delimited input frame accepted, in bytes.\n"
                "A frame beyond this limit aborts the run instead of buffering\n"
                "an unbounded amount of data after a corrupt frame boundary."
            ),
            default=64 * 1024 * 1024,
            gt=0
        )
    ]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{v}'")
        return level

    @field_validator("default_from", "default_to")
    @classmethod
    def validate_format(cls, v: str) -> str:
        try:
            return Format.parse(v).name
        except PanserError as ex:
            raise ValueError(ex.message) from None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        configfile = get_configfile()
        if configfile is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)
        return sources

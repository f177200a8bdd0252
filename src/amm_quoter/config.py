import tomllib
from pathlib import Path
from typing import Annotated

import tomlkit
from eth_typing import ChecksumAddress
from eth_utils.address import is_address, to_checksum_address
from pydantic import BaseModel, Field, HttpUrl, PlainSerializer, WebsocketUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from amm_quoter.constants import BASIS_POINTS_DENOMINATOR, DEFAULT_SLIPPAGE_TOLERANCE_BPS
from amm_quoter.logging import logger

CONFIG_DIR = Path.home() / ".config" / "amm_quoter"
CONFIG_FILE = CONFIG_DIR / "config.toml"


class SlippageSettings(BaseModel):
    default_tolerance_bps: int = Field(
        default=DEFAULT_SLIPPAGE_TOLERANCE_BPS,
        ge=0,
        le=BASIS_POINTS_DENOMINATOR,
    )


class ContractSettings(BaseModel):
    amm_pool_address: ChecksumAddress | None = None
    token_address: ChecksumAddress | None = None

    @field_validator("amm_pool_address", "token_address", mode="before")
    def validate_address(
        cls,  # noqa: N805
        address: str | None,
    ) -> ChecksumAddress | None:
        if address is None:
            return None
        if not is_address(address):
            msg = f"{address} is not a valid address"
            raise ValueError(msg)
        return to_checksum_address(address)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AMM_QUOTER_",
        env_nested_delimiter="__",
    )

    # Scalars first, so they serialize ahead of the TOML tables
    rpc: (
        HttpUrl
        | WebsocketUrl
        | Annotated[
            Path,
            PlainSerializer(lambda path: str(path.absolute()), return_type=str),
        ]
        | None
    ) = None
    slippage: SlippageSettings = SlippageSettings()
    contracts: ContractSettings = ContractSettings()

    @field_validator("rpc", mode="after")
    def validate_path(
        cls,  # noqa: N805
        endpoint: HttpUrl | WebsocketUrl | Path | None,
    ) -> HttpUrl | WebsocketUrl | Path | None:
        """
        Validate the endpoint.

        This will convert an IPC file path to an absolute reference, leaving HTTP and WS URLs as-is.
        """

        return endpoint.expanduser().absolute() if isinstance(endpoint, Path) else endpoint


def load_config_from_file(config_path: Path) -> Settings:
    return Settings.model_validate(
        tomllib.loads(
            config_path.read_text(),
        ),
    )


def save_config_to_file(config: Settings, config_path: Path = CONFIG_FILE) -> None:
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(
        tomlkit.dumps(
            config.model_dump(mode="json", exclude_none=True),
        ),
    )
    logger.info(f"Saved configuration to {config_path}.")


if CONFIG_FILE.exists():
    settings = load_config_from_file(CONFIG_FILE)
    logger.debug(f"Loaded configuration from {CONFIG_FILE}.")
else:
    settings = Settings()

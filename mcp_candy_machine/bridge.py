"""
Schema Bridge

The only place where configuration document types are mapped onto the Candy
Machine program types. Each enum mapping is an explicit table checked against
its source enum when this module is imported, so adding a document variant
without a program counterpart fails at import rather than misrouting at run
time.

Unit conversion happens here, at translation time: the document models keep
the user's units (SOL, RFC 3339 strings) and the program models carry lamports
and epoch seconds.
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Type

from solders.pubkey import Pubkey

from mcp_candy_machine.codecs import to_subunits
from mcp_candy_machine.config import LAMPORTS_PER_SOL
from mcp_candy_machine.enums import EndSettingType, UploadMethod, WhitelistMintMode
from mcp_candy_machine.program_types import (
    CandyCreator,
    CandyEndSettings,
    CandyEndSettingType,
    CandyGatekeeperConfig,
    CandyHiddenSettings,
    CandyMachineData,
    CandyWhitelistMintMode,
    CandyWhitelistMintSettings,
    StorageBackend,
)

if TYPE_CHECKING:
    from mcp_candy_machine.schemas import (
        ConfigData,
        EndSettings,
        GatekeeperConfig,
        HiddenSettings,
        WhitelistMintSettings,
    )

UUID_LENGTH = 6


def require_exhaustive(table: Mapping, source: Type[Enum]) -> Mapping:
    """
    Freezes a variant mapping after checking it covers every member of source.

    Raises:
        TypeError: If any member of source has no program counterpart.
    """
    missing = [member for member in source if member not in table]
    if missing:
        names = ", ".join(member.name for member in missing)
        raise TypeError(f"No program variant mapped for {source.__name__}: {names}")
    return MappingProxyType(dict(table))


END_SETTING_TYPES = require_exhaustive(
    {
        EndSettingType.date: CandyEndSettingType.DATE,
        EndSettingType.amount: CandyEndSettingType.AMOUNT,
    },
    EndSettingType,
)

WHITELIST_MINT_MODES = require_exhaustive(
    {
        WhitelistMintMode.burn_every_time: CandyWhitelistMintMode.BURN_EVERY_TIME,
        WhitelistMintMode.never_burn: CandyWhitelistMintMode.NEVER_BURN,
    },
    WhitelistMintMode,
)

STORAGE_BACKENDS = require_exhaustive(
    {
        UploadMethod.metaplex: StorageBackend.METAPLEX,
        UploadMethod.bundlr: StorageBackend.BUNDLR,
        UploadMethod.arloader: StorageBackend.ARLOADER,
    },
    UploadMethod,
)


def gatekeeper_into_candy_format(gatekeeper: GatekeeperConfig) -> CandyGatekeeperConfig:
    return CandyGatekeeperConfig(
        gatekeeper_network=gatekeeper.gatekeeper_network,
        expire_on_use=gatekeeper.expire_on_use,
    )


def end_settings_into_candy_format(end_settings: EndSettings) -> CandyEndSettings:
    return CandyEndSettings(
        end_setting_type=END_SETTING_TYPES[end_settings.end_setting_type],
        number=end_settings.number,
    )


def whitelist_into_candy_format(
    whitelist: WhitelistMintSettings, units_per_whole: int = LAMPORTS_PER_SOL
) -> CandyWhitelistMintSettings:
    discount_price = None
    if whitelist.discount_price is not None:
        discount_price = to_subunits(whitelist.discount_price, units_per_whole)
    return CandyWhitelistMintSettings(
        mode=WHITELIST_MINT_MODES[whitelist.mode],
        mint=whitelist.mint,
        presale=whitelist.presale,
        discount_price=discount_price,
    )


def hidden_settings_into_candy_format(hidden_settings: HiddenSettings) -> CandyHiddenSettings:
    return CandyHiddenSettings(
        name=hidden_settings.name,
        uri=hidden_settings.uri,
        hash=hidden_settings.hash,
    )


def upload_method_into_storage_backend(upload_method: UploadMethod) -> StorageBackend:
    return STORAGE_BACKENDS[upload_method]


def candy_machine_uuid(candy_machine: Pubkey) -> str:
    """The uuid stored on a candy machine: the leading characters of its address."""
    return str(candy_machine)[:UUID_LENGTH]


def config_into_candy_format(
    config: ConfigData,
    uuid: str,
    symbol: str = "",
    seller_fee_basis_points: int = 0,
    creators: Iterable[CandyCreator] = (),
    max_supply: int = 0,
    units_per_whole: int = LAMPORTS_PER_SOL,
) -> CandyMachineData:
    """
    Builds the program's CandyMachineData from a validated configuration.

    uuid, symbol, seller_fee_basis_points and creators come from the candy
    machine account and the asset metadata, not from the configuration
    document, so the caller supplies them.

    Raises:
        InvalidTimestampError: If goLiveDate is not a valid RFC 3339 timestamp.
    """

    def _optional(value, translate):
        return None if value is None else translate(value)

    return CandyMachineData(
        uuid=uuid,
        price=config.price_in_lamports(units_per_whole),
        symbol=symbol,
        seller_fee_basis_points=seller_fee_basis_points,
        max_supply=max_supply,
        is_mutable=config.is_mutable,
        retain_authority=config.retain_authority,
        go_live_date=config.go_live_timestamp(),
        end_settings=_optional(config.end_settings, end_settings_into_candy_format),
        creators=list(creators),
        hidden_settings=_optional(config.hidden_settings, hidden_settings_into_candy_format),
        whitelist_mint_settings=_optional(
            config.whitelist_mint_settings,
            lambda whitelist: whitelist_into_candy_format(whitelist, units_per_whole),
        ),
        items_available=config.number,
        gatekeeper=_optional(config.gatekeeper, gatekeeper_into_candy_format),
    )

"""
Candy Machine Program Types

Mirrors of the Candy Machine program's instruction-argument and account types.
The program owns this schema and versions it independently, so nothing in
this module knows about the configuration document: amounts are lamports,
dates are epoch seconds, addresses are 32-byte Pubkeys and enum values carry
the program's variant ordinals.

JSON dumps (model_dump(mode="json")) render public keys as base58 strings and
the hidden settings hash as a list of byte values.
"""
from enum import IntEnum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer
from solders.pubkey import Pubkey

ProgramPubkey = Annotated[Pubkey, PlainSerializer(str, return_type=str, when_used="json")]
ProgramHash = Annotated[bytes, PlainSerializer(list, return_type=List[int], when_used="json")]


class CandyEndSettingType(IntEnum):
    DATE = 0
    AMOUNT = 1


class CandyWhitelistMintMode(IntEnum):
    BURN_EVERY_TIME = 0
    NEVER_BURN = 1


class StorageBackend(IntEnum):
    """Storage selector consumed by the asset upload step."""
    METAPLEX = 0
    BUNDLR = 1
    ARLOADER = 2


class _ProgramModel(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class CandyGatekeeperConfig(_ProgramModel):
    gatekeeper_network: ProgramPubkey
    expire_on_use: bool


class CandyEndSettings(_ProgramModel):
    end_setting_type: CandyEndSettingType
    number: int


class CandyWhitelistMintSettings(_ProgramModel):
    mode: CandyWhitelistMintMode
    mint: ProgramPubkey
    presale: bool
    discount_price: Optional[int] = None


class CandyHiddenSettings(_ProgramModel):
    name: str
    uri: str
    hash: ProgramHash


class CandyCreator(_ProgramModel):
    address: ProgramPubkey
    verified: bool
    share: int


class CandyMachineData(_ProgramModel):
    """Arguments of the initialize/update instructions."""
    uuid: str
    price: int
    symbol: str
    seller_fee_basis_points: int
    max_supply: int
    is_mutable: bool
    retain_authority: bool
    go_live_date: Optional[int] = None
    end_settings: Optional[CandyEndSettings] = None
    creators: List[CandyCreator] = []
    hidden_settings: Optional[CandyHiddenSettings] = None
    whitelist_mint_settings: Optional[CandyWhitelistMintSettings] = None
    items_available: int
    gatekeeper: Optional[CandyGatekeeperConfig] = None

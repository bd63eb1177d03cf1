"""
Pydantic Data Models and Validation Schemas

This module defines the Candy Machine configuration document: the leaf
settings groups and the ConfigData aggregate that composes them. Models are
frozen once built and keep the user's units; translation to the program's
types is delegated to mcp_candy_machine.bridge.

Key Components:
- GatekeeperConfig: Gateway token network and expiry policy
- EndSettings: Campaign end condition (date or amount) with its threshold
- WhitelistMintSettings: Whitelist token policy and optional discount price
- HiddenSettings: Hidden-reveal metadata with a 32-byte hash
- ConfigData: The full document, plus the lazy go-live/price accessors
- SolanaConfig: Cluster connection settings taken from the environment

Validation:
- JSON keys are fixed by the document format; unknown keys are ignored
- Booleans, integers and strings are strict (no "true" -> True coercion)
- Addresses, timestamps, enum tokens and the hash go through codecs
- from_document() is fail-fast: only the first error (in field order) is
  raised, as one of the errors module's CandyConfigError kinds
"""
import json
from decimal import Decimal
from typing import Annotated, Any, Iterable, Mapping, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
)
from solders.pubkey import Pubkey

from mcp_candy_machine import bridge
from mcp_candy_machine import config
from mcp_candy_machine.codecs import (
    parse_address,
    parse_hash,
    parse_optional_address,
    to_decimal,
    to_epoch_seconds,
    to_subunits,
)
from mcp_candy_machine.enums import EndSettingType, UploadMethod, WhitelistMintMode
from mcp_candy_machine.errors import (
    CandyConfigError,
    MissingRequiredFieldError,
    TypeMismatchError,
)
from mcp_candy_machine.program_types import (
    CandyCreator,
    CandyEndSettings,
    CandyGatekeeperConfig,
    CandyHiddenSettings,
    CandyMachineData,
    CandyWhitelistMintSettings,
    StorageBackend,
)

DOCUMENT_ROOT = "<document>"


def _optional_str(value: Optional[Pubkey]) -> Optional[str]:
    return None if value is None else str(value)


Address = Annotated[
    Pubkey,
    PlainValidator(parse_address),
    PlainSerializer(str, return_type=str, when_used="json"),
]
OptionalAddress = Annotated[
    Optional[Pubkey],
    PlainValidator(parse_optional_address),
    PlainSerializer(_optional_str, return_type=Optional[str], when_used="json"),
]
SolAmount = Annotated[
    Decimal,
    PlainValidator(to_decimal),
    PlainSerializer(float, return_type=float, when_used="json"),
]
U64 = Annotated[StrictInt, Field(ge=0, le=config.U64_MAX)]
Hash32 = Annotated[
    bytes,
    PlainValidator(parse_hash),
    PlainSerializer(list, return_type=list, when_used="json"),
]


def first_validation_error(error: ValidationError) -> CandyConfigError:
    """Reduces a pydantic ValidationError to its first failure as a CandyConfigError."""
    detail = error.errors()[0]
    field = ".".join(str(part) for part in detail["loc"]) or DOCUMENT_ROOT
    cause = detail.get("ctx", {}).get("error")
    if isinstance(cause, CandyConfigError):
        return cause.with_field(field)
    if detail["type"] == "missing":
        return MissingRequiredFieldError("Missing required field", field=field)
    return TypeMismatchError(detail["msg"], field=field, value=detail.get("input"))


class DocumentModel(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="ignore")

    @classmethod
    def from_document(cls, document: Any):
        """
        Builds the model from an already-parsed JSON tree.

        Raises:
            CandyConfigError: The first validation failure, with its field path.
        """
        if not isinstance(document, Mapping):
            raise TypeMismatchError(
                f"Expected a JSON object, got {type(document).__name__}", field=DOCUMENT_ROOT, value=document
            )
        try:
            return cls.model_validate(dict(document))
        except ValidationError as e:
            raise first_validation_error(e) from e


# --- Leaf settings ---

class GatekeeperConfig(DocumentModel):
    gatekeeper_network: Address
    expire_on_use: StrictBool

    def into_candy_format(self) -> CandyGatekeeperConfig:
        return bridge.gatekeeper_into_candy_format(self)


class EndSettings(DocumentModel):
    end_setting_type: Annotated[EndSettingType, BeforeValidator(EndSettingType.parse)]
    number: U64

    def into_candy_format(self) -> CandyEndSettings:
        return bridge.end_settings_into_candy_format(self)


class WhitelistMintSettings(DocumentModel):
    mode: Annotated[WhitelistMintMode, BeforeValidator(WhitelistMintMode.parse)]
    mint: Address
    presale: StrictBool
    discount_price: Optional[SolAmount] = Field(default=None, alias="discountPrice")

    def into_candy_format(self, units_per_whole: int = config.LAMPORTS_PER_SOL) -> CandyWhitelistMintSettings:
        return bridge.whitelist_into_candy_format(self, units_per_whole)


class HiddenSettings(DocumentModel):
    name: StrictStr
    uri: StrictStr
    hash: Hash32

    def into_candy_format(self) -> CandyHiddenSettings:
        return bridge.hidden_settings_into_candy_format(self)


# --- Aggregate ---

class ConfigData(DocumentModel):
    """A validated Candy Machine configuration document."""

    price: SolAmount
    number: U64
    gatekeeper: Optional[GatekeeperConfig] = None
    sol_treasury_account: Address = Field(alias="solTreasuryAccount")
    spl_token_account: OptionalAddress = Field(default=None, alias="splTokenAccount")
    spl_token: OptionalAddress = Field(default=None, alias="splToken")
    go_live_date: StrictStr = Field(alias="goLiveDate")
    end_settings: Optional[EndSettings] = Field(default=None, alias="endSettings")
    whitelist_mint_settings: Optional[WhitelistMintSettings] = Field(default=None, alias="whitelistMintSettings")
    hidden_settings: Optional[HiddenSettings] = Field(default=None, alias="hiddenSettings")
    upload_method: Annotated[UploadMethod, BeforeValidator(UploadMethod.parse)] = Field(alias="uploadMethod")
    retain_authority: StrictBool = Field(alias="retainAuthority")
    is_mutable: StrictBool = Field(alias="isMutable")

    @classmethod
    def from_json(cls, text: str) -> "ConfigData":
        """Parses a JSON document and validates it."""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise TypeMismatchError(f"Invalid JSON: {e}", field=DOCUMENT_ROOT) from e
        return cls.from_document(document)

    def go_live_timestamp(self) -> int:
        """
        The go-live date as Unix epoch seconds.

        Parsed on demand, so a document with a malformed date still loads.

        Raises:
            InvalidTimestampError: If goLiveDate is not strict RFC 3339.
        """
        try:
            return to_epoch_seconds(self.go_live_date)
        except CandyConfigError as e:
            raise e.with_field("goLiveDate") from e

    def price_in_lamports(self, units_per_whole: int = config.LAMPORTS_PER_SOL) -> int:
        return to_subunits(self.price, units_per_whole)

    def storage_backend(self) -> StorageBackend:
        return bridge.upload_method_into_storage_backend(self.upload_method)

    def into_candy_format(
        self,
        uuid: str,
        symbol: str = "",
        seller_fee_basis_points: int = 0,
        creators: Iterable[CandyCreator] = (),
        max_supply: int = 0,
        units_per_whole: int = config.LAMPORTS_PER_SOL,
    ) -> CandyMachineData:
        return bridge.config_into_candy_format(
            self,
            uuid,
            symbol=symbol,
            seller_fee_basis_points=seller_fee_basis_points,
            creators=creators,
            max_supply=max_supply,
            units_per_whole=units_per_whole,
        )


class SolanaConfig(BaseModel):
    """Cluster connection settings handed to the transaction layer."""

    model_config = ConfigDict(frozen=True)

    json_rpc_url: str
    keypair_path: str
    commitment: str

    @classmethod
    def from_env(cls) -> "SolanaConfig":
        return cls(
            json_rpc_url=config.RPC_ENDPOINT,
            keypair_path=config.KEYPAIR_PATH,
            commitment=config.COMMITMENT,
        )

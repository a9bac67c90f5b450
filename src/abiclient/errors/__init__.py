"""Error taxonomy and custom error decoding."""

from .errors import (
    AbiDecodingError,
    AbiEncodingError,
    ConfigurationError,
    ContractCallType,
    decode_error_selector,
    get_abi_errors,
)
from .types import ABIError

"""
Core record model: the error type, its chain walker, the capability
registry and the constructor argument resolver.
"""

from handler_errors.core.arguments import (
    ProcessedArguments,
    convert_to_handler_error,
    process_arguments,
    resolve_arguments,
)
from handler_errors.core.capabilities import (
    RESERVED_NAMES,
    CapabilityGroup,
    CapabilityRegistry,
    FeatureFactory,
    get_capability_registry,
    set_capability_registry,
)
from handler_errors.core.chain import (
    ErrorChain,
    chain_to_string,
    filter_chain,
    find_in_chain,
    get_chain,
    get_root,
    map_chain,
    most_severe,
    serialize_chain,
)
from handler_errors.core.record import HandlerError, is_handler_error
from handler_errors.core.serialize import SerializedChainEntry, SerializedError
from handler_errors.core.severity import SEVERITY_WEIGHTS, Severity

__all__ = [
    "CapabilityGroup",
    "CapabilityRegistry",
    "ErrorChain",
    "FeatureFactory",
    "HandlerError",
    "ProcessedArguments",
    "RESERVED_NAMES",
    "SEVERITY_WEIGHTS",
    "SerializedChainEntry",
    "SerializedError",
    "Severity",
    "chain_to_string",
    "convert_to_handler_error",
    "filter_chain",
    "find_in_chain",
    "get_capability_registry",
    "get_chain",
    "get_root",
    "is_handler_error",
    "map_chain",
    "most_severe",
    "process_arguments",
    "resolve_arguments",
    "serialize_chain",
    "set_capability_registry",
]

"""Fixed call shapes for the ERC-20 and Chainlink aggregator reads.

Only four call shapes are ever needed, so they live in a constant table
rather than in JSON ABI files.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi import decode, encode
from eth_abi.exceptions import ABITypeError, DecodingError, ParseError
from eth_abi.grammar import parse
from eth_utils import function_signature_to_4byte_selector

from .errors import CallDecodeError, CallShapeError


@dataclass(frozen=True)
class CallShape:
    """Name plus argument and return types of one read-only contract function."""

    name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: object) -> bytes:
        """Return calldata: the 4-byte selector followed by the encoded args."""
        if len(args) != len(self.inputs):
            raise ValueError(
                f"{self.signature} takes {len(self.inputs)} argument(s), got {len(args)}"
            )
        if not self.inputs:
            return self.selector
        return self.selector + encode(list(self.inputs), list(args))

    def decode_output(self, data: bytes) -> tuple:
        """Decode a raw ``eth_call`` result into the declared output tuple.

        Raises:
            CallDecodeError: If ``data`` does not match ``outputs``.
        """
        try:
            return tuple(decode(list(self.outputs), bytes(data)))
        except DecodingError as e:
            raise CallDecodeError(self.signature, str(e)) from e


@dataclass(frozen=True)
class RoundData:
    """Latest observation published by a price feed."""

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int


BALANCE_OF = "balanceOf"
DECIMALS = "decimals"
LATEST_ROUND_DATA = "latestRoundData"

CALL_SHAPES: dict[str, CallShape] = {
    BALANCE_OF: CallShape(BALANCE_OF, inputs=("address",), outputs=("uint256",)),
    # Same shape on ERC-20 tokens and on aggregator feeds
    DECIMALS: CallShape(DECIMALS, inputs=(), outputs=("uint8",)),
    LATEST_ROUND_DATA: CallShape(
        LATEST_ROUND_DATA,
        inputs=(),
        outputs=("uint80", "int256", "uint256", "uint256", "uint80"),
    ),
}


def validate_call_shapes(shapes: dict[str, CallShape] | None = None) -> None:
    """Check that every embedded call shape uses well-formed ABI types.

    Raises:
        CallShapeError: If a type string does not parse or is not a valid ABI type.
    """
    shapes = CALL_SHAPES if shapes is None else shapes
    for key, shape in shapes.items():
        if key != shape.name:
            raise CallShapeError(f"Call shape {key!r} is registered as {shape.name!r}")
        for type_str in (*shape.inputs, *shape.outputs):
            try:
                parse(type_str).validate()
            except (ParseError, ABITypeError) as e:
                raise CallShapeError(
                    f"Malformed ABI type {type_str!r} in {shape.signature}: {e}"
                ) from e


def build_balance_call(owner: str) -> bytes:
    return CALL_SHAPES[BALANCE_OF].encode_call(owner)


def decode_balance_response(data: bytes) -> int:
    (balance,) = CALL_SHAPES[BALANCE_OF].decode_output(data)
    return int(balance)


def build_decimals_call() -> bytes:
    return CALL_SHAPES[DECIMALS].encode_call()


def decode_decimals_response(data: bytes) -> int:
    (decimals,) = CALL_SHAPES[DECIMALS].decode_output(data)
    return int(decimals)


def build_latest_round_call() -> bytes:
    return CALL_SHAPES[LATEST_ROUND_DATA].encode_call()


def decode_latest_round_response(data: bytes) -> RoundData:
    """Decode all five ``latestRoundData`` fields; callers mostly need ``answer``."""
    values = CALL_SHAPES[LATEST_ROUND_DATA].decode_output(data)
    return RoundData(*(int(v) for v in values))

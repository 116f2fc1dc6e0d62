"""
Codecs for the fixed-format identifiers used by the service.

Every identifier is an immutable value with a ``decode`` classmethod that
rejects anything off-format and an ``encode`` method that reproduces the
wire string exactly, so ``X.decode(raw).encode() == raw`` for any valid
``raw``.
"""
import dataclasses
import random
from enum import StrEnum
from typing import ClassVar

from omegle import errors

U8_MAX = 255
OMEGLE_DOMAIN = "omegle.com"


def parse_u8(numeral: str) -> int:
    """
    Parse a canonical decimal numeral in the 0..255 range.

    Signs, whitespace, non-ASCII digits and leading zeros are rejected,
    otherwise the value could not be encoded back to the same string.
    """
    if not numeral:
        raise ValueError("empty numeral")

    if not (numeral.isascii() and numeral.isdigit()):
        raise ValueError(f"{numeral!r} is not a decimal numeral")

    if len(numeral) > 1 and numeral.startswith("0"):
        raise ValueError(f"{numeral!r} has leading zeros")

    value = int(numeral)

    if value > U8_MAX:
        raise ValueError(f"{numeral!r} does not fit into 0..{U8_MAX}")

    return value


def ensure_str(raw: object, error: type[errors.DecodeError], expected: str) -> str:
    if not isinstance(raw, str):
        raise error(f"expected a string, got {type(raw).__name__}", raw=raw, expected=expected)
    return raw


def ensure_number(
    number: object, upper: int, error: type[errors.DecodeError], expected: str
) -> None:
    if isinstance(number, bool) or not isinstance(number, int) or not 0 <= number <= upper:
        raise error(
            f"expected a number in 0..{upper}, got {number!r}", raw=number, expected=expected
        )


@dataclasses.dataclass(frozen=True)
class RandID:
    """
    Random ID the service uses to pair you with (relatively) new strangers.
    Eight characters from A-Z and 2-9, without the easily confused
    'I', 'O', '1' and '0'.
    """

    ALPHABET: ClassVar[str] = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
    LENGTH: ClassVar[int] = 8
    BITS: ClassVar[int] = 5
    FORMAT: ClassVar[str] = "8 chars from 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'"

    value: str

    def __post_init__(self) -> None:
        self.validate(self.value)

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def validate(cls, raw: str) -> None:
        if len(raw) != cls.LENGTH:
            raise errors.InvalidRandID(
                f"expected random id to be {cls.LENGTH} chars long, got {len(raw)}",
                raw=raw,
                expected=cls.FORMAT,
            )

        invalid = sorted({char for char in raw if char not in cls.ALPHABET})

        if invalid:
            raise errors.InvalidRandID(
                f"random id contains disallowed chars {''.join(invalid)!r}",
                raw=raw,
                expected=cls.FORMAT,
            )

    @classmethod
    def decode(cls, raw: object) -> "RandID":
        return cls(ensure_str(raw, errors.InvalidRandID, cls.FORMAT))

    @classmethod
    def generate(cls, rng: random.Random | None = None) -> "RandID":
        rng = rng or random.SystemRandom()
        chars: list[str] = []

        while len(chars) < cls.LENGTH:
            sample = rng.getrandbits(cls.BITS)

            # Five bits cover the alphabet exactly, anything else is resampled.
            if sample < len(cls.ALPHABET):
                chars.append(cls.ALPHABET[sample])

        return cls("".join(chars))

    def encode(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class ChatServer:
    """A front server, 'front' followed by an u8 (front1, front42, ...)."""

    PREFIX: ClassVar[str] = "front"
    FORMAT: ClassVar[str] = "'front' + u8"

    number: int

    def __post_init__(self) -> None:
        ensure_number(self.number, U8_MAX, errors.InvalidChatServer, self.FORMAT)

    def __str__(self) -> str:
        return self.encode()

    @property
    def host(self) -> str:
        return f"{self.encode()}.{OMEGLE_DOMAIN}"

    def url(self, endpoint: str) -> str:
        return f"http://{self.host}/{endpoint}"

    @classmethod
    def decode(cls, raw: object) -> "ChatServer":
        raw = ensure_str(raw, errors.InvalidChatServer, cls.FORMAT)

        if not raw.startswith(cls.PREFIX):
            raise errors.InvalidChatServer(
                f"expected server string to start with {cls.PREFIX!r}",
                raw=raw,
                expected=cls.FORMAT,
            )

        numeral = raw[len(cls.PREFIX) :]

        if not numeral:
            raise errors.InvalidChatServer(
                f"expected server string that starts with {cls.PREFIX!r} "
                "to be followed by at least one char",
                raw=raw,
                expected=cls.FORMAT,
            )

        try:
            number = parse_u8(numeral)
        except ValueError as exc:
            raise errors.InvalidChatServer(
                f"expected server string that starts with {cls.PREFIX!r} "
                f"to be followed by a u8: {exc}",
                raw=raw,
                expected=cls.FORMAT,
            ) from exc

        return cls(number)

    def encode(self) -> str:
        return f"{self.PREFIX}{self.number}"


@dataclasses.dataclass(frozen=True)
class CheckServer:
    """An antinude (verification) server, like waw3.omegle.com."""

    PREFIX: ClassVar[str] = "waw"
    SUFFIX: ClassVar[str] = f".{OMEGLE_DOMAIN}"
    LENGTH: ClassVar[int] = 15
    FORMAT: ClassVar[str] = "'waw' + digit + '.omegle.com', 15 chars"

    number: int

    def __post_init__(self) -> None:
        ensure_number(self.number, 9, errors.InvalidCheckServer, self.FORMAT)

    def __str__(self) -> str:
        return self.encode()

    def url(self, endpoint: str) -> str:
        return f"http://{self.encode()}/{endpoint}"

    @classmethod
    def decode(cls, raw: object) -> "CheckServer":
        raw = ensure_str(raw, errors.InvalidCheckServer, cls.FORMAT)

        if not (
            len(raw) == cls.LENGTH and raw.startswith(cls.PREFIX) and raw.endswith(cls.SUFFIX)
        ):
            raise errors.InvalidCheckServer(
                f"expected check server string to start with {cls.PREFIX!r} and end with "
                f"{cls.SUFFIX[1:]!r}, and to be {cls.LENGTH} chars long",
                raw=raw,
                expected=cls.FORMAT,
            )

        digit = raw[len(cls.PREFIX) : -len(cls.SUFFIX)]

        if not (digit.isascii() and digit.isdigit()):
            raise errors.InvalidCheckServer(
                f"expected check server string that starts with {cls.PREFIX!r} "
                "to be followed by a digit",
                raw=raw,
                expected=cls.FORMAT,
            )

        return cls(int(digit))

    def encode(self) -> str:
        return f"{self.PREFIX}{self.number}{self.SUFFIX}"


class ServerType(StrEnum):
    CENTRAL = "central"
    SHARD = "shard"


@dataclasses.dataclass(frozen=True)
class ClientID:
    """
    ID the service hands out on chat start, e.g. 'central2:' followed by
    a 30 char user token. Sent along with every subsequent request.
    """

    TOKEN_LENGTH: ClassVar[int] = 30
    SEPARATOR: ClassVar[str] = ":"
    FORMAT: ClassVar[str] = "('central' | 'shard') + u8 + ':' + 30 chars"

    server_type: ServerType
    server_number: int
    token: str

    def __post_init__(self) -> None:
        ensure_number(self.server_number, U8_MAX, errors.InvalidClientID, self.FORMAT)

        if len(self.token) != self.TOKEN_LENGTH:
            raise errors.InvalidClientID(
                f"expected user token to be {self.TOKEN_LENGTH} chars long",
                raw=self.token,
                expected=self.FORMAT,
            )

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def decode(cls, raw: object) -> "ClientID":
        raw = ensure_str(raw, errors.InvalidClientID, cls.FORMAT)
        server_type = next((type_ for type_ in ServerType if raw.startswith(type_)), None)

        if server_type is None:
            tags = " or ".join(repr(str(type_)) for type_ in ServerType)
            raise errors.InvalidClientID(
                f"expected client id string to start with {tags}",
                raw=raw,
                expected=cls.FORMAT,
            )

        if len(raw) < cls.TOKEN_LENGTH:
            raise errors.InvalidClientID(
                f"expected client id string to be at least {cls.TOKEN_LENGTH} chars",
                raw=raw,
                expected=cls.FORMAT,
            )

        # Tag from the front, token and separator from the back, the rest
        # is the server number.
        separator_at = len(raw) - cls.TOKEN_LENGTH - 1
        numeral = raw[len(server_type) : max(separator_at, len(server_type))]

        if separator_at < len(server_type) or raw[separator_at] != cls.SEPARATOR:
            raise errors.InvalidClientID(
                f"expected {cls.SEPARATOR!r} before the last {cls.TOKEN_LENGTH} chars",
                raw=raw,
                expected=cls.FORMAT,
            )

        try:
            server_number = parse_u8(numeral)
        except ValueError as exc:
            raise errors.InvalidClientID(
                f"expected client id string to contain a valid u8 after {str(server_type)!r}: "
                f"{exc}",
                raw=raw,
                expected=cls.FORMAT,
            ) from exc

        return cls(server_type, server_number, raw[separator_at + 1 :])

    def encode(self) -> str:
        return f"{self.server_type}{self.server_number}{self.SEPARATOR}{self.token}"

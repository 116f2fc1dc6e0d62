from enum import StrEnum
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel as _BaseModel
from pydantic import Field, PlainSerializer, PlainValidator, StrictInt

from omegle.ids import ChatServer, CheckServer

T = TypeVar("T", bound="BaseModel")


class BaseModel(_BaseModel):
    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_raw(cls: type[T], data: str | bytes) -> T:
        return cls.model_validate_json(data)

    @classmethod
    def from_dict(cls: type[T], obj: Any) -> T:
        return cls.model_validate(obj)


class Language(StrEnum):
    ENGLISH = "en"
    FRENCH = "fr"
    SPANISH = "es"


ChatServerField = Annotated[
    ChatServer,
    PlainValidator(ChatServer.decode),
    PlainSerializer(ChatServer.encode, return_type=str),
]
CheckServerField = Annotated[
    CheckServer,
    PlainValidator(CheckServer.decode),
    PlainSerializer(CheckServer.encode, return_type=str),
]


class OmegleStatus(BaseModel):
    count: StrictInt = Field(ge=0)
    servers: list[ChatServerField] = Field(min_length=1)
    antinudeservers: list[CheckServerField] = Field(min_length=1)

    @property
    def chat_server(self) -> ChatServer:
        return self.servers[0]

    @property
    def check_server(self) -> CheckServer:
        return self.antinudeservers[0]


class Preferences(BaseModel):
    language: Language = Language.ENGLISH
    topics: list[str] = []

    @property
    def topics_param(self) -> str | None:
        """Comma-joined topics, or None when there are none to send."""
        if not self.topics:
            return None
        return ",".join(self.topics)

"""Typed commands the UI sends to the orchestration layer."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from versepoint.models.schemas import LocalFile


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())


class Login(_Command):
    kind: Literal["login"] = "login"
    username: str
    password: SecretStr


class Register(_Command):
    kind: Literal["register"] = "register"
    name: str
    email: str
    username: str
    password: SecretStr


class Logout(_Command):
    kind: Literal["logout"] = "logout"


class LoadAll(_Command):
    kind: Literal["load_all"] = "load_all"


class SubmitFiles(_Command):
    kind: Literal["submit_files"] = "submit_files"
    files: tuple[LocalFile, ...]


class AskQuestion(_Command):
    kind: Literal["ask_question"] = "ask_question"
    question: str


class SetModel(_Command):
    kind: Literal["set_model"] = "set_model"
    model_id: str


class SetPreference(_Command):
    kind: Literal["set_preference"] = "set_preference"
    key: str
    value: bool | str


class TogglePreference(_Command):
    kind: Literal["toggle_preference"] = "toggle_preference"
    key: str


class ToggleTheme(_Command):
    kind: Literal["toggle_theme"] = "toggle_theme"


Command = Annotated[
    Login
    | Register
    | Logout
    | LoadAll
    | SubmitFiles
    | AskQuestion
    | SetModel
    | SetPreference
    | TogglePreference
    | ToggleTheme,
    Field(discriminator="kind"),
]

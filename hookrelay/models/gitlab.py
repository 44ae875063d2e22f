"""GitLab push and merge request webhook models."""

from datetime import datetime
from typing import Literal, Union

from pydantic import Field

from hookrelay.models.base import WireModel


class Project(WireModel):
    name: str = ""


class Repository(WireModel):
    url: str = ""


class CommitAuthor(WireModel):
    name: str = ""
    email: str = ""


class Commit(WireModel):
    id: str = ""
    title: str = ""
    message: str = ""
    timestamp: datetime | None = None
    url: str = ""
    author: CommitAuthor = Field(default_factory=CommitAuthor)
    added: list[str] = Field(default_factory=list)
    modified: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)


class PushEvent(WireModel):
    """``object_kind == "push"``."""

    object_kind: Literal["push"] = "push"
    checkout_sha: str = ""
    project: Project = Field(default_factory=Project)
    repository: Repository = Field(default_factory=Repository)
    commits: list[Commit] = Field(default_factory=list)


class User(WireModel):
    name: str = ""
    username: str = ""


class Label(WireModel):
    id: int = 0
    title: str = ""
    project_id: int | None = None
    created_at: str = ""
    updated_at: str = ""
    description: str = ""
    type: str = ""


class LabelChanges(WireModel):
    previous: list[Label] = Field(default_factory=list)
    current: list[Label] = Field(default_factory=list)


class MergeChanges(WireModel):
    labels: LabelChanges = Field(default_factory=LabelChanges)


class MergeEvent(WireModel):
    """``object_kind == "merge_request"``."""

    object_kind: Literal["merge_request"] = "merge_request"
    user: User = Field(default_factory=User)
    project: Project = Field(default_factory=Project)
    repository: Repository = Field(default_factory=Repository)
    changes: MergeChanges = Field(default_factory=MergeChanges)


SourceEvent = Union[PushEvent, MergeEvent]

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from clientdesk.core.schema import Branch, ClientEdit

BRANCH_NOT_FOUND = "Selected branch does not exist"


@dataclass(frozen=True, slots=True)
class SubmissionAccepted:
    pass


@dataclass(frozen=True, slots=True)
class SubmissionRejected:
    reason: str


SubmissionVerdict = Union[SubmissionAccepted, SubmissionRejected]


class SubmissionValidator:
    """Checks referential integrity of an edit against the loaded branches.

    Field shapes belong to the form and to :class:`ClientEdit`; only the branch
    association is checked here.
    """

    def validate(self, edit: ClientEdit, branches: Iterable[Branch]) -> SubmissionVerdict:
        if not any(branch.id == edit.branch_id for branch in branches):
            return SubmissionRejected(BRANCH_NOT_FOUND)
        return SubmissionAccepted()

from __future__ import annotations

import uuid

from ..recommendations.models import Space, SpaceCreate

_spaces: dict[str, Space] = {}


def create_space(body: SpaceCreate) -> Space:
    space_id = uuid.uuid4().hex
    space = Space(id=space_id, **body.model_dump())
    _spaces[space_id] = space
    return space


def get_space(space_id: str) -> Space | None:
    return _spaces.get(space_id)


def list_spaces() -> list[Space]:
    return list(_spaces.values())


def delete_space(space_id: str) -> bool:
    return _spaces.pop(space_id, None) is not None


def clear_spaces() -> None:
    _spaces.clear()

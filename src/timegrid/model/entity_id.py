# SPDX-License-Identifier: MIT

import uuid
from typing import TypeAlias

EntityId: TypeAlias = str


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())


def short_entity_id(entity_id: EntityId) -> str:
    """First block of the uuid, used for compact display and prefix lookups."""
    return entity_id.split("-")[0]

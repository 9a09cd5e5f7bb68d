"""Endpoints, request bodies and expected messages of the Revue API."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from revuecheck._internal.types import Payload

CREATE_PATH = "/api/Revue/Create"
LIST_PATH = "/api/Revue/All"
EDIT_PATH = "/api/Revue/Edit"
DELETE_PATH = "/api/Revue/Delete"

# Query parameter carrying the revue id on edit and delete.
REVUE_ID_PARAM = "revueId"

NEW_REVUE: Payload = {
    "title": "New Revue",
    "url": "",
    "description": "Full Revue",
}

EDITED_REVUE: Payload = {
    "title": "Edited Revue",
    "url": "",
    "description": "Edited description",
}

NONEXISTENT_EDIT: Payload = {
    "title": "New Edited Revue",
    "description": "New Updated description",
    "url": "",
}

# Ids that are never created by the scenario.
FAKE_EDIT_ID = 678
FAKE_DELETE_ID = 789

MSG_CREATED = "Successfully created!"
MSG_EDITED = "Edited successfully"
MSG_DELETED = "The revue is deleted!"
MSG_NO_SUCH_REVUE = "There is no such revue!"

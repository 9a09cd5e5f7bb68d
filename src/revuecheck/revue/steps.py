"""The Revue CRUD scenario: seven checks run in a fixed order.

The create step captures the id of the new revue on the shared context;
the edit and delete steps read it back. The three negative checks use
fabricated ids and do not depend on earlier steps.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from revuecheck.dsl.checks import (
    expect_msg,
    expect_non_empty_array,
    expect_status,
    last_item_id,
    read_json,
)
from revuecheck.dsl.decorators import scenario, step
from revuecheck.revue.payloads import (
    CREATE_PATH,
    DELETE_PATH,
    EDIT_PATH,
    EDITED_REVUE,
    FAKE_DELETE_ID,
    FAKE_EDIT_ID,
    LIST_PATH,
    MSG_CREATED,
    MSG_DELETED,
    MSG_EDITED,
    MSG_NO_SUCH_REVUE,
    NEW_REVUE,
    NONEXISTENT_EDIT,
    REVUE_ID_PARAM,
)

if TYPE_CHECKING:
    from revuecheck.dsl.scenario import ScenarioContext

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


@step()
async def create_revue(ctx: ScenarioContext) -> None:
    """POST a new revue, then capture the id of the last listed revue."""
    resp = await ctx.client.post(CREATE_PATH, json=NEW_REVUE, name="Create Revue")
    expect_status(resp, HTTP_OK)
    expect_msg(await read_json(resp), MSG_CREATED)

    # Assumes the API appends new revues at the end of the listing.
    listing = await ctx.client.get(LIST_PATH, name="List Revues")
    expect_status(listing, HTTP_OK)
    ctx.revue_id = last_item_id(await read_json(listing))


@step()
async def list_revues(ctx: ScenarioContext) -> None:
    """GET all revues and expect a non-empty JSON array."""
    resp = await ctx.client.get(LIST_PATH, name="List Revues")
    expect_status(resp, HTTP_OK)
    expect_non_empty_array(await read_json(resp))


@step(needs_revue_id=True)
async def edit_revue(ctx: ScenarioContext) -> None:
    """PUT new content onto the captured revue."""
    resp = await ctx.client.put(
        EDIT_PATH,
        params={REVUE_ID_PARAM: ctx.require_revue_id()},
        json=EDITED_REVUE,
        name="Edit Revue",
    )
    expect_status(resp, HTTP_OK)
    expect_msg(await read_json(resp), MSG_EDITED)


@step(needs_revue_id=True)
async def delete_revue(ctx: ScenarioContext) -> None:
    """DELETE the captured revue."""
    resp = await ctx.client.delete(
        DELETE_PATH,
        params={REVUE_ID_PARAM: ctx.require_revue_id()},
        name="Delete Revue",
    )
    expect_status(resp, HTTP_OK)
    expect_msg(await read_json(resp), MSG_DELETED)


@step()
async def create_revue_without_required_fields(ctx: ScenarioContext) -> None:
    resp = await ctx.client.post(CREATE_PATH, json={}, name="Create Revue (empty)")
    expect_status(resp, HTTP_BAD_REQUEST)


@step()
async def edit_nonexistent_revue(ctx: ScenarioContext) -> None:
    resp = await ctx.client.put(
        EDIT_PATH,
        params={REVUE_ID_PARAM: str(FAKE_EDIT_ID)},
        json=NONEXISTENT_EDIT,
        name="Edit Revue (nonexistent)",
    )
    expect_status(resp, HTTP_BAD_REQUEST)
    expect_msg(await read_json(resp), MSG_NO_SUCH_REVUE)


@step()
async def delete_nonexistent_revue(ctx: ScenarioContext) -> None:
    resp = await ctx.client.delete(
        DELETE_PATH,
        params={REVUE_ID_PARAM: str(FAKE_DELETE_ID)},
        name="Delete Revue (nonexistent)",
    )
    expect_status(resp, HTTP_BAD_REQUEST)
    expect_msg(await read_json(resp), MSG_NO_SUCH_REVUE)


REVUE_SCENARIO = scenario(
    "Revue CRUD",
    [
        create_revue,
        list_revues,
        edit_revue,
        delete_revue,
        create_revue_without_required_fields,
        edit_nonexistent_revue,
        delete_nonexistent_revue,
    ],
)

"""Integration tests for the HTTP surface."""

import httpx
import pytest

from proposalcraft.config import Settings, get_settings
from proposalcraft.main import app
from tests.seed import SeedData


def auth(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_id}"}


@pytest.mark.asyncio
async def test_create_user_and_organization(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/users", json={"email": "li@example.com", "full_name": "Li Wei"}
    )
    assert response.status_code == 201
    user_id = response.json()["id"]

    response = await client.post(
        "/organizations", json={"name": "Harvest Trust"}, headers=auth(user_id)
    )
    assert response.status_code == 201
    assert response.json()["user_id"] == user_id

    response = await client.get("/organizations", headers=auth(user_id))
    assert [org["name"] for org in response.json()] == ["Harvest Trust"]


@pytest.mark.asyncio
async def test_duplicate_user_returns_409(client: httpx.AsyncClient) -> None:
    body = {"email": "li@example.com", "full_name": "Li Wei"}
    assert (await client.post("/users", json=body)).status_code == 201

    response = await client.post("/users", json=body)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_invalid_email_returns_422(client: httpx.AsyncClient) -> None:
    response = await client.post("/users", json={"email": "nope", "full_name": "X"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_missing_auth_returns_401(client: httpx.AsyncClient, seeded: SeedData) -> None:
    response = await client.get(f"/proposals/{seeded.proposal.id}")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_proposal_flow(client: httpx.AsyncClient, seeded: SeedData) -> None:
    headers = auth(seeded.user.id)

    response = await client.post(
        "/proposals",
        json={"organization_id": seeded.organization.id, "title": "School Meals Grant"},
        headers=headers,
    )
    assert response.status_code == 201
    proposal = response.json()
    assert proposal["status"] == "planning"
    assert proposal["phase"] == "planning"

    response = await client.patch(
        f"/proposals/{proposal['id']}", json={"phase": "drafting"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["phase"] == "drafting"
    assert response.json()["status"] == "planning"

    response = await client.post(
        f"/proposals/{proposal['id']}/sections",
        json={"title": "Summary", "content": "Hot lunch for every pupil", "order_index": 1},
        headers=headers,
    )
    assert response.status_code == 201
    section_id = response.json()["id"]

    response = await client.patch(
        f"/sections/{section_id}", json={"is_completed": True}, headers=headers
    )
    assert response.json()["is_completed"] is True

    response = await client.get(f"/proposals/{proposal['id']}/document", headers=headers)
    assert response.status_code == 200
    document = response.json()
    assert document["title"] == "School Meals Grant"
    assert document["word_count"] == 5

    response = await client.get("/proposals", headers=headers)
    assert [p["id"] for p in response.json()][0] == proposal["id"]


@pytest.mark.asyncio
async def test_patch_null_title_returns_422(client: httpx.AsyncClient, seeded: SeedData) -> None:
    response = await client.patch(
        f"/proposals/{seeded.proposal.id}", json={"title": None}, headers=auth(seeded.user.id)
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_proposal_returns_404(client: httpx.AsyncClient, seeded: SeedData) -> None:
    response = await client.get("/proposals/999", headers=auth(seeded.user.id))

    assert response.status_code == 404
    assert response.json()["detail"] == "Proposal with id 999 not found"


@pytest.mark.asyncio
async def test_create_proposal_for_unknown_organization(
    client: httpx.AsyncClient, seeded: SeedData
) -> None:
    response = await client.post(
        "/proposals",
        json={"organization_id": 999, "title": "Orphan"},
        headers=auth(seeded.user.id),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_turn_endpoint(client: httpx.AsyncClient, seeded: SeedData) -> None:
    headers = auth(seeded.user.id)

    response = await client.post(
        f"/proposals/{seeded.proposal.id}/turns",
        json={"content": "Help me with a timeline", "message_type": "planning"},
        headers=headers,
    )

    assert response.status_code == 201
    reply = response.json()
    assert reply["role"] == "assistant"
    assert reply["message_type"] == "planning"
    assert "Research & Analysis" in reply["content"]

    response = await client.get(f"/proposals/{seeded.proposal.id}/messages", headers=headers)
    assert [m["role"] for m in response.json()] == ["user", "assistant"]


@pytest.mark.asyncio
async def test_turn_with_empty_content_returns_422(
    client: httpx.AsyncClient, seeded: SeedData
) -> None:
    response = await client.post(
        f"/proposals/{seeded.proposal.id}/turns",
        json={"content": ""},
        headers=auth(seeded.user.id),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_turn_on_unknown_proposal_returns_404(
    client: httpx.AsyncClient, seeded: SeedData
) -> None:
    response = await client.post(
        "/proposals/999/turns", json={"content": "hello"}, headers=auth(seeded.user.id)
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_plain_message_and_memory(client: httpx.AsyncClient, seeded: SeedData) -> None:
    headers = auth(seeded.user.id)
    base = f"/proposals/{seeded.proposal.id}"

    response = await client.post(
        f"{base}/messages", json={"content": "note to self"}, headers=headers
    )
    assert response.status_code == 201

    response = await client.post(
        f"{base}/memory",
        json={"memory_type": "organization_info", "content": "Founded 2009"},
        headers=headers,
    )
    assert response.status_code == 201

    response = await client.get(f"{base}/messages", headers=headers)
    assert len(response.json()) == 1

    response = await client.get(f"{base}/memory", headers=headers)
    assert response.json()[0]["content"] == "Founded 2009"


@pytest.mark.asyncio
async def test_register_document(client: httpx.AsyncClient, seeded: SeedData) -> None:
    response = await client.post(
        f"/organizations/{seeded.organization.id}/documents",
        json={"filename": "budget.pdf", "file_type": "pdf", "file_size": 1024},
        headers=auth(seeded.user.id),
    )

    assert response.status_code == 201
    assert response.json()["upload_status"] == "pending"


@pytest.mark.asyncio
async def test_register_document_rejects_unknown_type(
    client: httpx.AsyncClient, seeded: SeedData
) -> None:
    response = await client.post(
        f"/organizations/{seeded.organization.id}/documents",
        json={"filename": "photo.png", "file_type": "png", "file_size": 1024},
        headers=auth(seeded.user.id),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_document_rejects_path_in_filename(
    client: httpx.AsyncClient, seeded: SeedData
) -> None:
    response = await client.post(
        f"/organizations/{seeded.organization.id}/documents",
        json={"filename": "../etc/passwd", "file_type": "pdf", "file_size": 1},
        headers=auth(seeded.user.id),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_register_oversized_document_returns_413(
    client: httpx.AsyncClient, seeded: SeedData
) -> None:
    app.dependency_overrides[get_settings] = lambda: Settings(
        database_url=None, max_upload_bytes=100, _env_file=None
    )

    response = await client.post(
        f"/organizations/{seeded.organization.id}/documents",
        json={"filename": "big.pdf", "file_type": "pdf", "file_size": 101},
        headers=auth(seeded.user.id),
    )

    assert response.status_code == 413

    response = await client.get(
        f"/organizations/{seeded.organization.id}/documents", headers=auth(seeded.user.id)
    )
    assert response.json() == []


@pytest.mark.asyncio
async def test_register_document_unknown_organization(
    client: httpx.AsyncClient, seeded: SeedData
) -> None:
    response = await client.post(
        "/organizations/999/documents",
        json={"filename": "budget.pdf", "file_type": "pdf", "file_size": 1},
        headers=auth(seeded.user.id),
    )

    assert response.status_code == 404

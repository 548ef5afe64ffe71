import pytest


async def _create_asset(client, **fields):
    payload = {"name": "Laptop", **fields}
    resp = await client.put("/api/v1/assets", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


async def _create_component(client, parent_id, name, parent_sub_id=None, **fields):
    payload = {"name": name, "parent_id": parent_id, "parent_sub_id": parent_sub_id, **fields}
    resp = await client.put("/api/v1/components", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


async def _upload(client, slot, owner_id, name, content, content_type):
    return await client.post(
        f"/api/v1/attachments/{slot}",
        data={"owner_id": owner_id, "last_modified": "1700000000000"},
        files={"file": (name, content, content_type)},
    )


@pytest.mark.anyio
async def test_health(async_client):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


@pytest.mark.anyio
async def test_create_get_and_list_assets(async_client):
    asset = await _create_asset(async_client, manufacturer="Lenovo", price=999.5, tags=["office"])
    assert len(asset["id"]) == 10
    assert asset["created_at"] and asset["updated_at"]

    resp = await async_client.get(f"/api/v1/assets/{asset['id']}")
    assert resp.status_code == 200
    assert resp.json()["manufacturer"] == "Lenovo"

    resp = await async_client.get("/api/v1/assets")
    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()] == [asset["id"]]


@pytest.mark.anyio
async def test_get_unknown_asset_is_404(async_client):
    resp = await async_client.get("/api/v1/assets/0000000000")
    assert resp.status_code == 404

    resp = await async_client.get("/api/v1/components/0000000000")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_asset_without_name_is_rejected(async_client):
    resp = await async_client.put("/api/v1/assets", json={"name": "   "})
    assert resp.status_code == 400
    assert "name" in resp.json()["detail"]


@pytest.mark.anyio
async def test_update_keeps_creation_time(async_client):
    asset = await _create_asset(async_client)
    payload = {**asset, "name": "Laptop (old)", "created_at": "2001-01-01T00:00:00Z"}

    resp = await async_client.put("/api/v1/assets", json=payload)
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["id"] == asset["id"]
    assert updated["name"] == "Laptop (old)"
    assert updated["created_at"] == asset["created_at"]


@pytest.mark.anyio
async def test_legacy_single_path_is_stored_as_list(async_client):
    asset = await _create_asset(async_client, photo_path="/Images/legacy.jpg")
    assert asset["photo_paths"] == ["/Images/legacy.jpg"]
    assert asset["photo_info"][0]["original_name"] == "legacy.jpg"
    assert asset["photo_path"] == "/Images/legacy.jpg"


@pytest.mark.anyio
async def test_component_parent_rules(async_client):
    laptop = await _create_asset(async_client)
    phone = await _create_asset(async_client, name="Phone")
    battery = await _create_component(async_client, phone["id"], "Battery")

    resp = await async_client.put("/api/v1/components", json={"name": "Fan", "parent_id": "9999999999"})
    assert resp.status_code == 400

    resp = await async_client.put(
        "/api/v1/components",
        json={"name": "Fan", "parent_id": laptop["id"], "parent_sub_id": battery["id"]},
    )
    assert resp.status_code == 400

    resp = await async_client.put(
        "/api/v1/components",
        json={"name": "Cell", "parent_id": phone["id"], "parent_sub_id": ""},
    )
    assert resp.status_code == 200
    assert resp.json()["parent_sub_id"] is None


@pytest.mark.anyio
async def test_component_cannot_move_under_its_descendant(async_client):
    asset = await _create_asset(async_client)
    c1 = await _create_component(async_client, asset["id"], "Board")
    c2 = await _create_component(async_client, asset["id"], "Chip", c1["id"])

    resp = await async_client.put("/api/v1/components", json={**c1, "parent_sub_id": c2["id"]})
    assert resp.status_code == 400

    resp = await async_client.put("/api/v1/components", json={**c1, "parent_sub_id": c1["id"]})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_descendants_and_cascading_component_delete(async_client):
    asset = await _create_asset(async_client)
    c1 = await _create_component(async_client, asset["id"], "Board")
    c2 = await _create_component(async_client, asset["id"], "Chip", c1["id"])
    c3 = await _create_component(async_client, asset["id"], "Pin", c2["id"])
    other = await _create_component(async_client, asset["id"], "Fan")

    resp = await async_client.get(f"/api/v1/components/{c1['id']}/descendants")
    assert resp.status_code == 200
    assert set(resp.json()["descendant_ids"]) == {c2["id"], c3["id"]}

    resp = await async_client.delete(f"/api/v1/components/{c1['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["not_found"] is False
    assert set(body["deleted_ids"]) == {c1["id"], c2["id"], c3["id"]}

    resp = await async_client.get("/api/v1/components")
    assert [c["id"] for c in resp.json()] == [other["id"]]


@pytest.mark.anyio
async def test_asset_delete_removes_only_first_level_components(async_client):
    asset = await _create_asset(async_client)
    c1 = await _create_component(async_client, asset["id"], "Board")
    d2 = await _create_component(async_client, asset["id"], "Chip", c1["id"])

    resp = await async_client.delete(f"/api/v1/assets/{asset['id']}")
    assert resp.status_code == 200
    assert set(resp.json()["deleted_ids"]) == {asset["id"], c1["id"]}

    resp = await async_client.get(f"/api/v1/components/{d2['id']}")
    assert resp.status_code == 200
    assert resp.json()["parent_sub_id"] == c1["id"]


@pytest.mark.anyio
async def test_deleting_missing_records_succeeds(async_client):
    resp = await async_client.delete("/api/v1/assets/0000000000")
    assert resp.status_code == 200
    assert resp.json()["not_found"] is True

    resp = await async_client.delete("/api/v1/components/0000000000")
    assert resp.status_code == 200
    assert resp.json()["not_found"] is True


@pytest.mark.anyio
async def test_upload_and_delete_photo(async_client, storage_dir):
    resp = await _upload(async_client, "photo", "1234567890", "My Photo.JPG", b"\xff\xd8jpeg", "image/jpeg")
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["path"].startswith("/Images/")
    assert body["path"].endswith(".jpg")
    assert body["file_info"]["original_name"] == "My Photo.JPG"
    assert body["file_info"]["size"] == 6
    assert body["file_info"]["last_modified"] == 1700000000000
    assert (storage_dir / body["path"].lstrip("/")).read_bytes() == b"\xff\xd8jpeg"

    resp = await async_client.post("/api/v1/attachments/delete", json={"path": body["path"]})
    assert resp.status_code == 200
    assert resp.json()["deleted"] is True
    assert not (storage_dir / body["path"].lstrip("/")).exists()

    resp = await async_client.post("/api/v1/attachments/delete", json={"path": body["path"]})
    assert resp.status_code == 200
    assert resp.json()["deleted"] is False


@pytest.mark.anyio
async def test_upload_rules_per_slot(async_client):
    resp = await _upload(async_client, "photo", "1", "notes.txt", b"text", "text/plain")
    assert resp.status_code == 400

    resp = await _upload(async_client, "receipt", "1", "bill.pdf", b"%PDF-1.4", "application/pdf")
    assert resp.status_code == 201
    assert resp.json()["path"].startswith("/Receipts/")

    resp = await _upload(async_client, "manual", "1", "guide.png", b"png", "image/png")
    assert resp.status_code == 400

    resp = await _upload(async_client, "invoice", "1", "bill.pdf", b"%PDF", "application/pdf")
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_upload_too_large(async_client):
    content = b"0" * (1024 * 1024 + 1)
    resp = await _upload(async_client, "manual", "1", "huge.pdf", content, "application/pdf")
    assert resp.status_code == 413


@pytest.mark.anyio
async def test_file_delete_rejects_paths_outside_storage(async_client):
    resp = await async_client.post("/api/v1/attachments/delete", json={"path": "/../../etc/passwd"})
    assert resp.status_code == 500


@pytest.mark.anyio
async def test_deleting_an_asset_purges_its_files(async_client, storage_dir):
    upload = (await _upload(async_client, "photo", "x", "a.png", b"png", "image/png")).json()
    asset = await _create_asset(
        async_client,
        photo_paths=[upload["path"]],
        photo_info=[upload["file_info"]],
    )
    stored = storage_dir / upload["path"].lstrip("/")
    assert stored.exists()

    resp = await async_client.delete(f"/api/v1/assets/{asset['id']}")
    assert resp.status_code == 200
    assert resp.json()["file_failures"] == []
    assert not stored.exists()

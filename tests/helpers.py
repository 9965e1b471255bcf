from fastapi.testclient import TestClient


def register(client: TestClient, username: str, role: str = "buyer", password: str = "secret") -> dict:
    resp = client.post(
        "/api/register",
        json={
            "username": username,
            "password": password,
            "email": f"{username}@campus.edu",
            "role": role,
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def list_item(client: TestClient, title: str = "Calculus Textbook", price: str = "40.00", **fields) -> int:
    body = {"title": title, "price": price, "category": "Books", "condition": "good"}
    body.update(fields)
    resp = client.post("/api/items", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["item_id"]

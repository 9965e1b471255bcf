from decimal import Decimal

from tests.helpers import list_item, register


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "database": "connected", "sessions": "connected"}


# ---------------------------------------------------------------------------
# auth
# ---------------------------------------------------------------------------

def test_register_starts_session(client, sessions):
    data = register(client, "alice", role="seller")

    assert data["username"] == "alice"
    assert data["role"] == "seller"
    assert "user_id" in data
    assert "password" not in data
    assert len(sessions.store) == 1

    me = client.get("/api/user")
    assert me.status_code == 200
    assert me.json()["email"] == "alice@campus.edu"


def test_register_duplicate_username(make_client):
    register(make_client(), "alice")
    response = make_client().post(
        "/api/register",
        json={"username": "alice", "password": "x", "email": "x@campus.edu", "role": "buyer"},
    )
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_login_and_logout(make_client, sessions):
    register(make_client(), "alice", password="hunter2")
    client = make_client()

    bad = client.post("/api/login", json={"username": "alice", "password": "nope"})
    assert bad.status_code == 401

    unknown = client.post("/api/login", json={"username": "ghost", "password": "nope"})
    assert unknown.status_code == 401
    assert unknown.json()["error"] == bad.json()["error"]

    ok = client.post("/api/login", json={"username": "alice", "password": "hunter2"})
    assert ok.status_code == 200
    assert ok.json()["username"] == "alice"
    assert client.get("/api/user").status_code == 200

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/user").status_code == 401


def test_requests_without_session_are_rejected(client):
    response = client.get("/api/cart")
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


def test_role_change_refreshes_session(client):
    register(client, "alice", role="buyer")
    assert client.post("/api/items", json={"title": "Lamp", "price": "5.00"}).status_code == 403

    response = client.put("/api/user/role", json={"role": "both"})
    assert response.status_code == 200
    assert response.json()["role"] == "both"

    assert client.post("/api/items", json={"title": "Lamp", "price": "5.00"}).status_code == 201


def test_role_change_applies_to_other_sessions(make_client):
    laptop = make_client()
    register(laptop, "alice", role="seller")
    phone = make_client()
    assert phone.post("/api/login", json={"username": "alice", "password": "secret"}).status_code == 200
    assert phone.post("/api/items", json={"title": "Lamp", "price": "5.00"}).status_code == 201

    assert laptop.put("/api/user/role", json={"role": "buyer"}).status_code == 200

    assert phone.post("/api/items", json={"title": "Chair", "price": "9.00"}).status_code == 403
    assert phone.get("/api/seller/orders").status_code == 403


def test_password_change(make_client):
    client = make_client()
    register(client, "alice", password="old-pw")

    wrong = client.put("/api/user/password", json={"current_password": "x", "new_password": "new-pw"})
    assert wrong.status_code == 403

    ok = client.put("/api/user/password", json={"current_password": "old-pw", "new_password": "new-pw"})
    assert ok.status_code == 200

    login = make_client().post("/api/login", json={"username": "alice", "password": "new-pw"})
    assert login.status_code == 200


# ---------------------------------------------------------------------------
# catalog
# ---------------------------------------------------------------------------

def test_item_round_trip(client):
    register(client, "alice", role="seller")
    fields = {
        "title": "Calculus Textbook",
        "description": "Stewart, 8th edition",
        "price": "40.00",
        "category": "Books",
        "condition": "good",
        "image_url": "/uploads/calc.jpg",
    }
    item_id = client.post("/api/items", json=fields).json()["item_id"]

    item = client.get(f"/api/items/{item_id}").json()

    assert item["id"] == item_id
    assert item["seller_name"] == "alice"
    assert Decimal(item["price"]) == Decimal("40.00")
    for key in ("title", "description", "category", "condition", "image_url"):
        assert item[key] == fields[key]


def test_missing_item_is_404(client):
    response = client.get("/api/items/999")
    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "NOT_FOUND"
    assert body["error"] == "Item not found"


def test_category_and_search(client):
    register(client, "alice", role="seller")
    list_item(client, title="Calculus Textbook", category="Books")
    list_item(client, title="Desk Lamp", category="Furniture", description="LED, barely used")
    list_item(client, title="Physics Notes", category="Books", description="calculus-based")

    books = client.get("/api/items/category/Books").json()
    assert {i["title"] for i in books} == {"Calculus Textbook", "Physics Notes"}

    found = client.get("/api/items/search/calculus").json()
    assert {i["title"] for i in found} == {"Calculus Textbook", "Physics Notes"}

    assert [i["title"] for i in client.get("/api/items/search/led").json()] == ["Desk Lamp"]
    assert len(client.get("/api/items").json()) == 3


def test_only_owner_can_edit_or_delete(make_client):
    alice = make_client()
    alice_id = register(alice, "alice", role="seller")["user_id"]
    item_id = list_item(alice)

    carol = make_client()
    register(carol, "carol", role="seller")
    assert carol.put(f"/api/items/{item_id}", json={"price": "1.00"}).status_code == 403
    assert carol.delete(f"/api/items/{item_id}").status_code == 403

    updated = alice.put(f"/api/items/{item_id}", json={"price": "35.00"})
    assert updated.status_code == 200
    assert Decimal(updated.json()["price"]) == Decimal("35.00")
    assert updated.json()["title"] == "Calculus Textbook"

    mine = alice.get(f"/api/items/seller/{alice_id}").json()
    assert [i["id"] for i in mine] == [item_id]

    assert alice.delete(f"/api/items/{item_id}").status_code == 200
    assert alice.get(f"/api/items/{item_id}").status_code == 404


def test_buyers_cannot_list_items(client):
    register(client, "bob", role="buyer")
    response = client.post("/api/items", json={"title": "Lamp", "price": "5.00"})
    assert response.status_code == 403


def test_ordered_item_cannot_be_deleted(make_client):
    seller = make_client()
    register(seller, "alice", role="seller")
    item_id = list_item(seller)

    buyer = make_client()
    register(buyer, "bob")
    buyer.post("/api/cart", json={"item_id": item_id, "quantity": 1})
    assert buyer.post("/api/orders").status_code == 201

    assert seller.delete(f"/api/items/{item_id}").status_code == 409


# ---------------------------------------------------------------------------
# cart
# ---------------------------------------------------------------------------

def test_cart_flow(make_client):
    seller = make_client()
    register(seller, "alice", role="seller")
    book = list_item(seller, title="Calculus Textbook", price="40.00")
    lamp = list_item(seller, title="Desk Lamp", price="15.00")

    buyer = make_client()
    register(buyer, "bob")

    added = buyer.post("/api/cart", json={"item_id": book, "quantity": 1})
    assert added.status_code == 201
    buyer.post("/api/cart", json={"item_id": book, "quantity": 1})
    buyer.post("/api/cart", json={"item_id": lamp})

    cart = buyer.get("/api/cart").json()
    assert [(i["item_id"], i["quantity"]) for i in cart["items"]] == [(book, 2), (lamp, 1)]
    assert Decimal(cart["total_price"]) == Decimal("95.00")

    cart = buyer.put(f"/api/cart/{lamp}", json={"quantity": 0}).json()
    assert [i["item_id"] for i in cart["items"]] == [book]

    assert buyer.put(f"/api/cart/{lamp}", json={"quantity": 2}).status_code == 404
    assert buyer.delete(f"/api/cart/{lamp}").status_code == 404

    cart = buyer.delete("/api/cart").json()
    assert cart["items"] == []
    assert Decimal(cart["total_price"]) == 0


# ---------------------------------------------------------------------------
# orders and notifications
# ---------------------------------------------------------------------------

def test_place_order_scenario(make_client):
    seller = make_client()
    register(seller, "alice", role="seller")
    book = list_item(seller, title="Calculus Textbook", price="40.00")

    buyer = make_client()
    register(buyer, "bob")
    buyer.post("/api/cart", json={"item_id": book, "quantity": 2})

    placed = buyer.post("/api/orders")
    assert placed.status_code == 201
    order_id = placed.json()["order_id"]
    assert Decimal(placed.json()["total_amount"]) == Decimal("80.00")
    assert placed.json()["status"] == "pending"

    assert buyer.get("/api/cart").json()["items"] == []

    order = buyer.get(f"/api/orders/{order_id}").json()
    assert len(order["items"]) == 1
    line = order["items"][0]
    assert (line["item_id"], line["quantity"]) == (book, 2)
    assert Decimal(line["price_at_purchase"]) == Decimal("40.00")
    assert line["title"] == "Calculus Textbook"

    assert [o["id"] for o in buyer.get("/api/orders").json()] == [order_id]

    seller_note = seller.get("/api/notifications").json()
    assert [n["message"] for n in seller_note] == [
        f"New order received for your item. Order ID: {order_id}"
    ]
    buyer_note = buyer.get("/api/notifications/unread").json()
    assert [n["message"] for n in buyer_note] == [
        f"Your order #{order_id} has been placed successfully!"
    ]


def test_empty_cart_order_is_conflict(client):
    register(client, "bob")
    response = client.post("/api/orders")
    assert response.status_code == 409
    assert response.json()["error"] == "Cart is empty"
    assert client.get("/api/orders").json() == []
    assert client.get("/api/notifications").json() == []


def test_order_access_and_status_updates(make_client):
    seller = make_client()
    register(seller, "alice", role="seller")
    book = list_item(seller)

    buyer = make_client()
    register(buyer, "bob")
    buyer.post("/api/cart", json={"item_id": book, "quantity": 1})
    order_id = buyer.post("/api/orders").json()["order_id"]

    stranger = make_client()
    register(stranger, "eve", role="both")
    assert stranger.get(f"/api/orders/{order_id}").status_code == 403
    assert stranger.put(f"/api/orders/{order_id}/status", json={"status": "shipped"}).status_code == 403
    assert buyer.put(f"/api/orders/{order_id}/status", json={"status": "shipped"}).status_code == 403

    assert buyer.get("/api/seller/orders").status_code == 403
    seller_orders = seller.get("/api/seller/orders").json()
    assert [o["id"] for o in seller_orders] == [order_id]
    assert seller_orders[0]["buyer_name"] == "bob"

    bogus = seller.put(f"/api/orders/{order_id}/status", json={"status": "lost"})
    assert bogus.status_code == 422

    skip = seller.put(f"/api/orders/{order_id}/status", json={"status": "delivered"})
    assert skip.status_code == 409

    shipped = seller.put(f"/api/orders/{order_id}/status", json={"status": "shipped"})
    assert shipped.status_code == 200
    assert shipped.json()["status"] == "shipped"

    assert seller.put("/api/orders/999/status", json={"status": "shipped"}).status_code == 404

    messages = [n["message"] for n in buyer.get("/api/notifications").json()]
    assert messages[0] == f"Your order #{order_id} status has been updated to: shipped"


def test_notification_read_flags(make_client):
    seller = make_client()
    register(seller, "alice", role="seller")
    book = list_item(seller)

    buyer = make_client()
    register(buyer, "bob")
    buyer.post("/api/cart", json={"item_id": book, "quantity": 1})
    buyer.post("/api/orders")

    note_id = buyer.get("/api/notifications/unread").json()[0]["id"]

    assert seller.put(f"/api/notifications/{note_id}/read").status_code == 403
    assert buyer.put("/api/notifications/999/read").status_code == 404

    marked = buyer.put(f"/api/notifications/{note_id}/read")
    assert marked.status_code == 200
    assert marked.json()["is_read"] is True
    assert buyer.get("/api/notifications/unread").json() == []

    assert seller.put("/api/notifications/read-all").json() == {"updated": 1}
    assert seller.get("/api/notifications/unread").json() == []

    assert seller.delete(f"/api/notifications/{note_id}").status_code == 403
    assert buyer.delete(f"/api/notifications/{note_id}").status_code == 200
    assert buyer.get("/api/notifications").json() == []

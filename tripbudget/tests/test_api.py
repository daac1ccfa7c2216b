"""
Tests for the HTTP API.
"""
from decimal import Decimal

import pytest


@pytest.fixture
def trip_data(client):
    """Create a trip with Alice (owner) and Bob."""
    response = client.post("/api/trips", json={"name": "Goa Trip", "member_names": ["Alice", "Bob"]})
    assert response.status_code == 201
    data = response.json()
    data["ids"] = {member["name"]: member["id"] for member in data["members"]}
    return data


def add_budget_item(client, trip_data, name, amount, members):
    response = client.post(
        f"/api/budget/{trip_data['id']}/items",
        json={
            "name": name,
            "amount": str(amount),
            "category": "Accommodation",
            "member_ids": [trip_data["ids"][m] for m in members],
        }
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    """Test health endpoints."""
    assert client.get("/").status_code == 200
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_trip(trip_data):
    """Test the first member becomes the owner."""
    assert [m["status"] for m in trip_data["members"]] == ["owner", "joined"]
    assert len(trip_data["join_code"]) == 6


def test_create_trip_validation(client):
    """Test trip payload validation."""
    assert client.post("/api/trips", json={"name": "Go", "member_names": ["A"]}).status_code == 422
    assert client.post("/api/trips", json={"name": "Goa", "member_names": []}).status_code == 422

    response = client.post("/api/trips", json={"name": "Goa Trip", "member_names": ["Alice", " "]})
    assert response.json()["members"][1]["name"] == "Member 2"


def test_unknown_trip(client):
    """Test unknown trips are 404 everywhere."""
    assert client.get("/api/trips/missing").status_code == 404
    assert client.get("/api/dashboard/missing").status_code == 404
    assert client.get("/api/settlement/missing").status_code == 404
    assert client.get("/api/budget/missing/items").status_code == 404


def test_member_rules(client, trip_data):
    """Test owner protection and member updates."""
    trip_id = trip_data["id"]
    owner_id = trip_data["ids"]["Alice"]

    response = client.post(f"/api/trips/{trip_id}/members", json={"name": "Carol", "email": "carol@example.com"})
    assert response.status_code == 201
    carol = response.json()
    assert carol["status"] == "invited"

    assert client.post(f"/api/trips/{trip_id}/members", json={"name": "Eve", "status": "owner"}).status_code == 400
    assert client.patch(
        f"/api/trips/{trip_id}/members/{owner_id}", json={"status": "joined"}
    ).status_code == 400
    assert client.patch(
        f"/api/trips/{trip_id}/members/{carol['id']}", json={"status": "owner"}
    ).status_code == 400
    assert client.delete(f"/api/trips/{trip_id}/members/{owner_id}").status_code == 400

    response = client.patch(
        f"/api/trips/{trip_id}/members/{carol['id']}", json={"name": "Caroline", "status": "co-organizer"}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Caroline"
    assert response.json()["status"] == "co-organizer"

    assert client.delete(f"/api/trips/{trip_id}/members/{carol['id']}").status_code == 200
    members = client.get(f"/api/trips/{trip_id}").json()["members"]
    assert [m["name"] for m in members] == ["Alice", "Bob"]


def test_assigned_member_cannot_be_removed(client, trip_data):
    """Test members referenced by items stay on the trip."""
    add_budget_item(client, trip_data, "Hotel", 100, ["Alice", "Bob"])
    response = client.delete(f"/api/trips/{trip_data['id']}/members/{trip_data['ids']['Bob']}")
    assert response.status_code == 409


def test_budget_item_validation(client, trip_data):
    """Test budget items need a positive amount and known members."""
    url = f"/api/budget/{trip_data['id']}/items"
    bob = trip_data["ids"]["Bob"]
    assert client.post(url, json={"name": "Hotel", "amount": "0", "member_ids": [bob]}).status_code == 422
    assert client.post(url, json={"name": "Hotel", "amount": "10", "member_ids": []}).status_code == 422
    assert client.post(url, json={"name": "Hotel", "amount": "10", "member_ids": ["nobody"]}).status_code == 400


def test_dashboard_and_spending_flow(client, trip_data):
    """Test recording spending against a budget item."""
    trip_id = trip_data["id"]
    alice = trip_data["ids"]["Alice"]
    hotel = add_budget_item(client, trip_data, "Hotel", 100, ["Alice", "Bob"])

    response = client.post(
        f"/api/spending/{trip_id}/items",
        json={"budget_item_id": hotel["id"], "name": "Hotel", "amount": "40", "member_ids": [alice]}
    )
    assert response.status_code == 201

    # Drafts do not count
    client.post(
        f"/api/spending/{trip_id}/items",
        json={"name": "Souvenirs", "amount": "500", "member_ids": [alice], "is_completed": False}
    )

    dashboard = client.get(f"/api/dashboard/{trip_id}").json()
    cards = {card["name"]: card for card in dashboard["members"]}
    assert Decimal(cards["Alice"]["budgeted"]) == Decimal(50)
    assert Decimal(cards["Alice"]["spent"]) == Decimal(40)
    assert Decimal(cards["Alice"]["remaining"]) == Decimal(10)
    assert Decimal(dashboard["totals"]["total_spent"]) == Decimal(40)
    assert Decimal(dashboard["remaining_items"][0]["remaining"]) == Decimal(60)
    assert dashboard["comparison"]["verdict"] == "Saved money!"

    remaining = client.get(f"/api/budget/{trip_id}/remaining").json()
    assert Decimal(remaining[0]["remaining"]) == Decimal(60)


def test_spending_capped_at_remaining(client, trip_data):
    """Test completed spending cannot exceed what is left on its budget item."""
    trip_id = trip_data["id"]
    bob = trip_data["ids"]["Bob"]
    hotel = add_budget_item(client, trip_data, "Hotel", 100, ["Alice", "Bob"])
    url = f"/api/spending/{trip_id}/items"

    first = client.post(url, json={"budget_item_id": hotel["id"], "name": "Hotel", "amount": "70", "member_ids": [bob]})
    assert first.status_code == 201
    over = client.post(url, json={"budget_item_id": hotel["id"], "name": "Hotel", "amount": "40", "member_ids": [bob]})
    assert over.status_code == 400

    # A draft is not capped until it is completed
    draft = client.post(
        url,
        json={"budget_item_id": hotel["id"], "name": "Hotel", "amount": "40", "member_ids": [bob], "is_completed": False}
    )
    assert draft.status_code == 201
    assert client.patch(f"{url}/{draft.json()['id']}", json={"is_completed": True}).status_code == 400
    assert client.patch(f"{url}/{draft.json()['id']}", json={"amount": "30", "is_completed": True}).status_code == 200

    # Editing an item is checked without counting itself
    assert client.patch(f"{url}/{first.json()['id']}", json={"amount": "70"}).status_code == 200


def test_mark_budget_item_spent(client, trip_data):
    """Test marking a planned item as spent records its remaining amount."""
    trip_id = trip_data["id"]
    hotel = add_budget_item(client, trip_data, "Hotel", 100, ["Alice", "Bob"])
    url = f"/api/budget/{trip_id}/items/{hotel['id']}/spend"

    partial = client.post(url, json={"amount": "30"})
    assert partial.status_code == 201
    rest = client.post(url)
    assert rest.status_code == 201
    assert Decimal(rest.json()["amount"]) == Decimal(70)
    assert rest.json()["is_completed"] is True
    assert rest.json()["member_ids"] == hotel["member_ids"]

    assert client.post(url).status_code == 400


def test_delete_budget_item_unlinks_spending(client, trip_data):
    """Test spending survives its budget item being deleted."""
    trip_id = trip_data["id"]
    hotel = add_budget_item(client, trip_data, "Hotel", 100, ["Alice"])
    client.post(f"/api/budget/{trip_id}/items/{hotel['id']}/spend")

    assert client.delete(f"/api/budget/{trip_id}/items/{hotel['id']}").status_code == 200
    spending = client.get(f"/api/spending/{trip_id}/items").json()
    assert len(spending) == 1
    assert spending[0]["budget_item_id"] is None


def test_settlement_report(client, trip_data):
    """Test the settlement report for both bases."""
    trip_id = trip_data["id"]
    bob = trip_data["ids"]["Bob"]
    add_budget_item(client, trip_data, "Hotel", 100, ["Alice"])
    client.post(f"/api/spending/{trip_id}/items", json={"name": "Taxi", "amount": "20", "member_ids": [bob]})

    report = client.get(f"/api/settlement/{trip_id}").json()
    assert report["basis"] == "budgeted"
    assert report["settlements"][0]["text"] == "Bob pays ₹50.00 to Alice"
    assert report["file_name"] == "Goa_Trip_Trip_Report.pdf"

    spent = client.get(f"/api/settlement/{trip_id}", params={"basis": "spent"}).json()
    assert Decimal(spent["total_expenses"]) == Decimal(20)
    assert spent["settlements"][0]["text"] == "Alice pays ₹10.00 to Bob"

    assert client.get(f"/api/settlement/{trip_id}", params={"basis": "bogus"}).status_code == 422


def test_delete_trip(client, trip_data):
    """Test deleting a trip removes its items."""
    trip_id = trip_data["id"]
    add_budget_item(client, trip_data, "Hotel", 100, ["Alice"])

    assert client.delete(f"/api/trips/{trip_id}").status_code == 200
    assert client.get(f"/api/trips/{trip_id}").status_code == 404
    assert client.get(f"/api/budget/{trip_id}/items").status_code == 404


def explore_snapshot(amount="90", member_ids=None):
    return {
        "trip": {
            "id": "local",
            "name": "Explore Trip",
            "members": [{"id": "a", "name": "Alice"}, {"id": "b", "name": "Bob"}, {"id": "c", "name": "Carol"}],
        },
        "budget_items": [
            {"id": "x", "name": "Boat", "amount": amount, "member_ids": ["a"] if member_ids is None else member_ids}
        ],
    }


def test_explore_report(client):
    """Test reports for a client-held snapshot."""
    response = client.post("/api/explore/report", json=explore_snapshot())
    assert response.status_code == 200
    lines = [line["text"] for line in response.json()["settlements"]]
    assert lines == ["Bob pays ₹30.00 to Alice", "Carol pays ₹30.00 to Alice"]

    dashboard = client.post("/api/explore/dashboard", json=explore_snapshot()).json()
    assert Decimal(dashboard["members"][0]["budgeted"]) == Decimal(90)


def test_explore_rejects_invalid_items(client):
    """Test snapshot items are validated like created items."""
    assert client.post("/api/explore/report", json=explore_snapshot(member_ids=[])).status_code == 422
    assert client.post("/api/explore/report", json=explore_snapshot(amount="0")).status_code == 422
    assert client.post("/api/explore/dashboard", json=explore_snapshot(amount="-5")).status_code == 422


def test_explore_rejects_unknown_members(client):
    """Test snapshot items may only reference members of the trip."""
    snapshot = explore_snapshot(member_ids=["ghost"])
    snapshot["spending_items"] = [
        {"id": "s1", "name": "Taxi", "amount": "10", "member_ids": ["a", "nobody"], "is_completed": True}
    ]

    response = client.post("/api/explore/report", json=snapshot)
    assert response.status_code == 422
    assert "ghost, nobody" in response.text
    assert client.post("/api/explore/dashboard", json=snapshot).status_code == 422


def test_amounts_limited_to_cents(client, trip_data):
    """Test amounts with more than two decimal places are rejected, not rounded."""
    trip_id = trip_data["id"]
    alice = trip_data["ids"]["Alice"]
    url = f"/api/budget/{trip_id}/items"

    assert client.post(url, json={"name": "Hotel", "amount": "10.005", "member_ids": [alice]}).status_code == 422
    assert client.post(
        f"/api/spending/{trip_id}/items", json={"name": "Taxi", "amount": "3.333", "member_ids": [alice]}
    ).status_code == 422
    assert client.get(url).json() == []

    response = client.post(url, json={"name": "Hotel", "amount": "10.50", "member_ids": [alice]})
    assert response.status_code == 201
    assert Decimal(response.json()["amount"]) == Decimal("10.50")
    assert client.post(f"{url}/{response.json()['id']}/spend", json={"amount": "1.001"}).status_code == 422

def test_create_club_needs_president(client, admin, club):
    assert club["name"] == "Chess Club"
    assert club["category"] == "Games"
    assert club["member_count"] == 0
    assert club["president"] is None
    assert club["status"] == "needs_president"

    resp = client.get("/api/admin/clubs", headers=admin["headers"])
    assert [c["id"] for c in resp.json()] == [club["id"]]


def test_create_club_default_category(client, admin):
    resp = client.post(
        "/api/admin/clubs", json={"name": "Robotics"}, headers=admin["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["category"] == "General"


def test_admins_only_see_their_own_clubs(api, client, admin, club):
    other = api.register_admin(email="other@example.com")
    api.create_club(other, name="Drama Society")

    names = [c["name"] for c in client.get("/api/admin/clubs", headers=admin["headers"]).json()]
    assert names == ["Chess Club"]

    resp = client.get(f"/api/admin/clubs/{club['id']}", headers=other["headers"])
    assert resp.status_code == 403
    resp = client.delete(f"/api/admin/clubs/{club['id']}", headers=other["headers"])
    assert resp.status_code == 403


def test_search_filters_by_name(api, client, admin, club):
    api.create_club(admin, name="Debate Team", description="chess of words")
    resp = client.get("/api/admin/clubs", params={"q": "DEBATE"}, headers=admin["headers"])
    assert [c["name"] for c in resp.json()] == ["Debate Team"]


def test_update_club(client, admin, club):
    resp = client.patch(
        f"/api/admin/clubs/{club['id']}",
        json={"description": "Tournaments every Friday"},
        headers=admin["headers"],
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["description"] == "Tournaments every Friday"
    assert body["name"] == "Chess Club"


def test_assign_president_bootstraps_membership(api, client, admin, club, student):
    body = api.assign_president(admin, club["id"], student["id"])
    assert body["status"] == "active"
    assert body["member_count"] == 1
    assert body["president"]["id"] == student["id"]

    resp = client.get("/api/president/clubs", headers=student["headers"])
    assert [c["id"] for c in resp.json()] == [club["id"]]

    joined = client.get("/api/clubs/joined", headers=student["headers"]).json()
    assert [c["id"] for c in joined] == [club["id"]]

    feed = api.notifications(student)
    assert feed["unread_count"] == 1
    assert feed["notifications"][0]["type"] == "info"
    assert feed["notifications"][0]["club_name"] == "Chess Club"


def test_assign_president_accepts_pending_request(api, client, admin, club, student):
    api.join(student, club["id"])
    assert len(client.get("/api/admin/requests", headers=admin["headers"]).json()) == 1

    body = api.assign_president(admin, club["id"], student["id"])
    assert body["member_count"] == 1

    roster = client.get(f"/api/clubs/{club['id']}/members", headers=student["headers"]).json()
    assert len(roster) == 1
    assert roster[0]["role_name"] == "President"
    assert client.get("/api/admin/requests", headers=admin["headers"]).json() == []


def test_assign_unknown_profile(client, admin, club):
    resp = client.put(
        f"/api/admin/clubs/{club['id']}/president",
        json={"profile_id": "missing"},
        headers=admin["headers"],
    )
    assert resp.status_code == 404


def test_delete_club_removes_memberships(api, client, admin, club, student):
    membership = api.join(student, club["id"])
    api.decide(admin, membership["id"], "approve")

    resp = client.delete(f"/api/admin/clubs/{club['id']}", headers=admin["headers"])
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    assert client.get(f"/api/admin/clubs/{club['id']}", headers=admin["headers"]).status_code == 404
    assert client.get("/api/clubs/joined", headers=student["headers"]).json() == []
    assert client.get("/api/clubs", headers=student["headers"]).json() == []
    assert api.decide(admin, membership["id"], "reject").status_code == 404


def test_admin_requests_only_for_clubs_without_president(api, client, admin, student):
    open_club = api.create_club(admin, name="Open Club")
    led_club = api.create_club(admin, name="Led Club")
    president = api.register_student(email="pres@example.com")
    api.assign_president(admin, led_club["id"], president["id"])

    api.join(student, open_club["id"])
    api.join(student, led_club["id"])

    requests = client.get("/api/admin/requests", headers=admin["headers"]).json()
    assert [r["club_name"] for r in requests] == ["Open Club"]
    assert requests[0]["full_name"] == "Sam Student"
    assert requests[0]["has_president"] is False


def test_user_directory_flags(api, client, admin, club, student):
    president = api.register_student(email="pres@example.com", full_name="Pat President")
    api.assign_president(admin, club["id"], president["id"])

    users = {u["email"]: u for u in client.get("/api/admin/users", headers=admin["headers"]).json()}
    assert users["pres@example.com"]["is_president"] is True
    assert users["student@example.com"]["is_president"] is False
    assert users["student@example.com"]["is_admin"] is False
    assert "admin@example.com" not in users


def test_chess_club_walkthrough(api, client, admin, student):
    resp = client.post(
        "/api/admin/clubs",
        json={"name": "Chess Club", "category": "Academic"},
        headers=admin["headers"],
    )
    club = resp.json()
    assert (club["status"], club["member_count"]) == ("needs_president", 0)

    club = api.assign_president(admin, club["id"], student["id"])
    assert (club["status"], club["member_count"]) == ("active", 1)

    users = client.get("/api/admin/users", headers=admin["headers"]).json()
    assert [u["is_president"] for u in users if u["id"] == student["id"]] == [True]


def test_delete_club_keeps_notifications_without_club(api, client, admin, club, student):
    api.decide(admin, api.join(student, club["id"])["id"], "approve")
    before = api.notifications(student)["notifications"]
    assert [(n["type"], n["club_id"]) for n in before] == [("accepted", club["id"])]

    client.delete(f"/api/admin/clubs/{club['id']}", headers=admin["headers"])

    after = api.notifications(student)["notifications"]
    assert [n["id"] for n in after] == [before[0]["id"]]
    assert after[0]["club_id"] is None
    assert after[0]["club_name"] is None


def test_profile_can_preside_several_clubs(api, client, admin, club, student):
    other_club = api.create_club(admin, name="Art Club")
    api.assign_president(admin, club["id"], student["id"])
    api.assign_president(admin, other_club["id"], student["id"])

    presided = client.get("/api/president/clubs", headers=student["headers"]).json()
    assert sorted(c["name"] for c in presided) == ["Art Club", "Chess Club"]

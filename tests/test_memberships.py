def _directory_status(client, student, club_id):
    clubs = client.get("/api/clubs", headers=student["headers"]).json()
    return next(c["membership_status"] for c in clubs if c["id"] == club_id)


def test_join_creates_pending_request(api, client, club, student):
    membership = api.join(student, club["id"])
    assert membership["status"] == "pending"
    assert membership["user_id"] == student["id"]
    assert membership["responded_at"] is None
    assert _directory_status(client, student, club["id"]) == "pending"


def test_join_twice_conflicts(api, client, club, student):
    api.join(student, club["id"])
    resp = client.post(f"/api/clubs/{club['id']}/join", headers=student["headers"])
    assert resp.status_code == 409


def test_join_unknown_club(client, student):
    assert client.post("/api/clubs/nope/join", headers=student["headers"]).status_code == 404


def test_admins_cannot_join(client, admin, club):
    resp = client.post(f"/api/clubs/{club['id']}/join", headers=admin["headers"])
    assert resp.status_code == 403


def test_admin_approves_while_club_has_no_president(api, client, admin, club, student):
    membership = api.join(student, club["id"])

    resp = api.decide(admin, membership["id"], "approve")
    assert resp.status_code == 200
    assert resp.json()["status"] == "accepted"
    assert resp.json()["responded_at"]

    # Approving twice is not a valid transition
    assert api.decide(admin, membership["id"], "approve").status_code == 409

    club_info = client.get(f"/api/admin/clubs/{club['id']}", headers=admin["headers"]).json()
    assert club_info["member_count"] == 1

    feed = api.notifications(student)
    assert [n["type"] for n in feed["notifications"]] == ["accepted"]


def test_reject_keeps_row_and_notifies(api, client, admin, club, student):
    membership = api.join(student, club["id"])

    resp = api.decide(admin, membership["id"], "reject")
    assert resp.status_code == 200
    assert resp.json()["status"] == "rejected"
    assert _directory_status(client, student, club["id"]) == "rejected"
    assert [n["type"] for n in api.notifications(student)["notifications"]] == ["rejected"]

    # A rejected request can be reopened
    reopened = api.join(student, club["id"])
    assert reopened["id"] == membership["id"]
    assert reopened["status"] == "pending"


def test_president_takes_over_decisions(api, admin, presided_club, student):
    club, president = presided_club
    membership = api.join(student, club["id"])

    resp = api.decide(admin, membership["id"], "approve")
    assert resp.status_code == 403
    assert resp.json()["detail"] == "This club has a president who handles its memberships"

    resp = api.decide(president, membership["id"], "approve")
    assert resp.status_code == 200
    assert resp.json()["status"] == "accepted"


def test_outsiders_cannot_decide(api, admin, club, student):
    other_admin = api.register_admin(email="other@example.com")
    bystander = api.register_student(email="bystander@example.com")
    membership = api.join(student, club["id"])

    assert api.decide(other_admin, membership["id"], "approve").status_code == 403
    assert api.decide(bystander, membership["id"], "approve").status_code == 403
    assert api.decide(student, membership["id"], "approve").status_code == 403


def test_unknown_membership(api, admin):
    assert api.decide(admin, "missing", "approve").status_code == 404


def test_remove_member(api, client, admin, presided_club, student):
    club, president = presided_club
    membership = api.join(student, club["id"])
    api.decide(president, membership["id"], "approve")

    resp = client.delete(f"/api/memberships/{membership['id']}", headers=president["headers"])
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    club_info = client.get(f"/api/admin/clubs/{club['id']}", headers=admin["headers"]).json()
    assert club_info["member_count"] == 1
    assert _directory_status(client, student, club["id"]) is None

    # Removed members may ask again
    assert api.join(student, club["id"])["status"] == "pending"


def test_remove_requires_accepted_membership(api, client, presided_club, student):
    club, president = presided_club
    membership = api.join(student, club["id"])
    resp = client.delete(f"/api/memberships/{membership['id']}", headers=president["headers"])
    assert resp.status_code == 409


def test_president_cannot_be_removed(client, presided_club):
    club, president = presided_club
    roster = client.get(f"/api/clubs/{club['id']}/members", headers=president["headers"]).json()
    own = next(entry for entry in roster if entry["id"] == president["id"])

    resp = client.delete(f"/api/memberships/{own['membership_id']}", headers=president["headers"])
    assert resp.status_code == 403


def test_approval_moves_request_into_roster_once(api, client, admin, presided_club, student):
    club, president = presided_club
    membership = api.join(student, club["id"])
    requests_path = f"/api/president/clubs/{club['id']}/requests"
    assert [r["id"] for r in client.get(requests_path, headers=president["headers"]).json()] == [
        membership["id"]
    ]

    assert api.decide(president, membership["id"], "approve").status_code == 200

    assert client.get(requests_path, headers=president["headers"]).json() == []
    roster = client.get(f"/api/clubs/{club['id']}/members", headers=student["headers"]).json()
    assert [entry["id"] for entry in roster].count(student["id"]) == 1

    # A second approval must not add the member again
    assert api.decide(president, membership["id"], "approve").status_code == 409
    roster = client.get(f"/api/clubs/{club['id']}/members", headers=student["headers"]).json()
    assert [entry["id"] for entry in roster].count(student["id"]) == 1


def test_directory_member_count_tracks_accepted_rows(api, client, admin, club, student):
    def directory_count():
        clubs = client.get("/api/clubs", headers=student["headers"]).json()
        return next(c["member_count"] for c in clubs if c["id"] == club["id"])

    other = api.register_student(email="other@example.com")
    first = api.join(student, club["id"])
    second = api.join(other, club["id"])
    assert directory_count() == 0

    api.decide(admin, first["id"], "approve")
    assert directory_count() == 1

    api.decide(admin, second["id"], "reject")
    assert directory_count() == 1

    client.delete(f"/api/memberships/{first['id']}", headers=admin["headers"])
    assert directory_count() == 0

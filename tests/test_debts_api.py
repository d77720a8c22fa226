from conftest import make_record


def make_debt(client, **overrides):
    payload = {
        "type": "borrow",
        "amount": 500,
        "person": "สมชาย",
        "description": "ยืมค่าข้าว",
        "date": "2026-02-03",
        "status": "unpaid",
    }
    payload.update(overrides)
    res = client.post("/api/debts", json=payload)
    assert res.status_code == 201, res.get_json()
    return res.get_json()


class TestDebts:
    def test_create_and_list(self, auth_client):
        make_debt(auth_client, date="2026-02-01", description="older")
        make_debt(auth_client, type="lend", amount=1200, date="2026-02-10", description="newer")
        make_debt(auth_client, amount=300, status="paid", date="2026-01-15")

        body = auth_client.get("/api/debts").get_json()
        assert [d["description"] for d in body["debts"]][:2] == ["newer", "older"]
        assert body["summary"] == {"unpaidBorrow": 500, "unpaidLend": 1200, "unpaidCount": 2}

    def test_status_filter(self, auth_client):
        make_debt(auth_client)
        make_debt(auth_client, status="paid")
        paid = auth_client.get("/api/debts?status=paid").get_json()["debts"]
        assert [d["status"] for d in paid] == ["paid"]

    def test_status_defaults_to_unpaid(self, auth_client):
        debt = make_debt(auth_client, status=None)
        assert debt["status"] == "unpaid"

    def test_missing_fields(self, auth_client):
        res = auth_client.post("/api/debts", json={"type": "borrow", "amount": 100})
        assert res.status_code == 400
        assert res.get_json()["error"]

    def test_update_marks_paid(self, auth_client):
        debt = make_debt(auth_client)
        payload = {k: debt[k] for k in ("type", "amount", "person", "description", "date")}
        res = auth_client.put(f"/api/debts/{debt['id']}", json=dict(payload, status="paid"))
        assert res.status_code == 200
        assert res.get_json()["status"] == "paid"
        assert auth_client.get("/api/debts").get_json()["summary"]["unpaidCount"] == 0

    def test_delete(self, auth_client):
        debt = make_debt(auth_client)
        assert auth_client.delete(f"/api/debts/{debt['id']}").status_code == 200
        assert auth_client.get(f"/api/debts/{debt['id']}").status_code == 404

    def test_debts_do_not_change_record_totals(self, auth_client):
        make_record(auth_client, type="income", amount=1000, category="เงินเดือน")
        make_debt(auth_client, amount=5000)
        summary = auth_client.get("/api/records").get_json()["summary"]
        assert summary == {"totalIncome": 1000, "totalExpense": 0, "balance": 1000}


class TestDebtIsolation:
    def test_other_user_gets_404(self, auth_client, other_client):
        debt = make_debt(auth_client)
        did = debt["id"]
        assert other_client.get(f"/api/debts/{did}").status_code == 404
        assert other_client.put(f"/api/debts/{did}", json={
            "type": "lend", "amount": 1, "person": "x", "description": "x", "date": "2026-02-03",
        }).status_code == 404
        assert other_client.delete(f"/api/debts/{did}").status_code == 404
        assert other_client.get("/api/debts").get_json()["debts"] == []
        assert auth_client.get(f"/api/debts/{did}").get_json()["type"] == "borrow"

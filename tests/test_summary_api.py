from conftest import make_record
from moneybook.aggregates import shift_months


class TestSummary:
    def test_expense_shows_in_current_month(self, auth_client, today):
        make_record(auth_client, amount=350, category="อาหาร")
        body = auth_client.get("/api/summary").get_json()

        assert len(body["monthly"]) == 6
        current = body["monthly"][-1]
        assert current["month"] == f"{today:%Y-%m}"
        assert current["expense"] == 350
        assert current["balance"] == -350
        assert body["expenseByCategory"] == [{"name": "อาหาร", "value": 350}]
        assert body["incomeByCategory"] == []

    def test_months_parameter_and_older_records(self, auth_client, today):
        two_months_ago = shift_months(today, -2)
        make_record(auth_client, type="income", amount=25000, category="เงินเดือน",
                    date=two_months_ago.isoformat())
        make_record(auth_client, amount=100)

        body = auth_client.get("/api/summary?months=3").get_json()
        assert [m["month"] for m in body["monthly"]] == [
            f"{shift_months(today, -i):%Y-%m}" for i in (2, 1, 0)
        ]
        assert body["monthly"][0]["income"] == 25000
        # category split is for the current month only
        assert body["incomeByCategory"] == []

        narrow = auth_client.get("/api/summary?months=1").get_json()
        assert len(narrow["monthly"]) == 1
        assert narrow["monthly"][0]["income"] == 0

    def test_months_is_clamped(self, auth_client):
        assert len(auth_client.get("/api/summary?months=0").get_json()["monthly"]) == 1
        assert len(auth_client.get("/api/summary?months=500").get_json()["monthly"]) == 24

    def test_bad_months(self, auth_client):
        res = auth_client.get("/api/summary?months=abc")
        assert res.status_code == 400
        assert res.get_json()["error"]

    def test_categories_sorted_by_value(self, auth_client):
        make_record(auth_client, amount=89, category="เครื่องดื่ม")
        make_record(auth_client, amount=8500, category="ที่พัก")
        make_record(auth_client, amount=350, category="อาหาร")
        make_record(auth_client, amount=450, category="อาหาร")
        names = [c["name"] for c in auth_client.get("/api/summary").get_json()["expenseByCategory"]]
        assert names == ["ที่พัก", "อาหาร", "เครื่องดื่ม"]

    def test_only_own_records(self, auth_client, other_client):
        make_record(other_client, amount=999)
        body = auth_client.get("/api/summary").get_json()
        assert body["monthly"][-1]["expense"] == 0
        assert body["expenseByCategory"] == []

"""Tests for the spreadsheet web app client and the Sheets API store."""
from unittest.mock import MagicMock

import pytest
import requests

from weightlog.clients.gas import GasClient, GasError, GasNotConfigured
from weightlog.clients.sheets import SheetStore
from weightlog.models.records import MealRecord

BASE_URL = "https://script.example.com/macros/s/test/exec"


def _upstream(status_code=200, content_type="application/json; charset=utf-8", body=b"{}"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = {"content-type": content_type}
    resp.content = body
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def gas(session):
    return GasClient(BASE_URL, timeout=5, session=session)


class TestGasClient:
    def test_missing_url_is_rejected(self):
        with pytest.raises(GasNotConfigured):
            GasClient("")

    def test_forward_appends_query_string(self, gas, session):
        session.get.return_value = _upstream(body=b'{"status":"success"}')

        resp = gas.forward("action=getHistory")

        assert session.get.call_args.args[0] == f"{BASE_URL}?action=getHistory"
        assert resp.ok
        assert resp.body == b'{"status":"success"}'

    def test_forward_without_query(self, gas, session):
        session.get.return_value = _upstream()
        gas.forward("")
        assert session.get.call_args.args[0] == BASE_URL

    def test_forward_keeps_upstream_error_status(self, gas, session):
        session.get.return_value = _upstream(status_code=404, content_type="text/html", body=b"nope")
        resp = gas.forward("x=1")
        assert resp.status_code == 404
        assert not resp.ok

    def test_transport_error_becomes_gas_error(self, gas, session):
        session.get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(GasError, match="boom"):
            gas.forward("action=getHistory")

    def test_get_history_returns_rows(self, gas, session):
        session.get.return_value = _upstream(
            body=b'{"status":"success","data":[{"date":"2025/10/20","weight":"70.5"}]}'
        )
        assert gas.get_history() == [{"date": "2025/10/20", "weight": "70.5"}]

    def test_get_history_empty_when_not_success(self, gas, session):
        session.get.return_value = _upstream(body=b'{"status":"error"}')
        assert gas.get_history() == []

    def test_non_json_reply_is_an_error(self, gas, session):
        session.get.return_value = _upstream(content_type="text/html", body=b"<html>login</html>")
        with pytest.raises(GasError, match="non-JSON"):
            gas.get_history()

    def test_record_weight_formats_one_decimal(self, gas, session):
        session.get.return_value = _upstream(body=b'{"status":"success"}')

        gas.record_weight("2025/10/20", 70.46)

        url = session.get.call_args.args[0]
        assert "action=recordWeight" in url
        assert "date=2025/10/20" in url
        assert "weight=70.5" in url

    def test_record_weight_failure_status(self, gas, session):
        session.get.return_value = _upstream(body=b'{"status":"error","message":"sheet locked"}')
        with pytest.raises(GasError, match="sheet locked"):
            gas.record_weight("2025/10/20", 70)

    def test_record_meal_posts_payload(self, gas, session):
        session.post.return_value = _upstream()
        meal = MealRecord(date="2025/10/20", calorie=520, meal_name="curry rice")

        gas.record_meal(meal)

        assert session.post.call_args.kwargs["json"] == {
            "type": "meal",
            "date": "2025/10/20",
            "calorie": 520.0,
            "mealName": "curry rice",
        }

    def test_record_meal_upstream_error(self, gas, session):
        session.post.return_value = _upstream(status_code=500)
        with pytest.raises(GasError):
            gas.record_meal(MealRecord(date="2025/10/20", calorie=100, meal_name="tea"))


class TestSheetStore:
    @pytest.fixture
    def service(self):
        return MagicMock()

    @pytest.fixture
    def store(self, service):
        return SheetStore("sheet-id", "weights", service=service)

    def test_list_weights_maps_rows(self, store, service):
        values = service.spreadsheets.return_value.values.return_value
        values.get.return_value.execute.return_value = {
            "values": [["2025/10/20", "70.5"], ["2025/10/21"]],
        }

        rows = store.list_weights()

        values.get.assert_called_once_with(spreadsheetId="sheet-id", range="weights!A2:B")
        assert rows == [
            {"date": "2025/10/20", "weight": "70.5"},
            {"date": "2025/10/21", "weight": None},
        ]

    def test_list_weights_empty_sheet(self, store, service):
        values = service.spreadsheets.return_value.values.return_value
        values.get.return_value.execute.return_value = {}
        assert store.list_weights() == []

    def test_append_weight(self, store, service):
        values = service.spreadsheets.return_value.values.return_value

        store.append_weight("2025/10/20", "70.5")

        values.append.assert_called_once_with(
            spreadsheetId="sheet-id",
            range="weights!A:B",
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [["2025/10/20", "70.5"]]},
        )
        values.append.return_value.execute.assert_called_once()

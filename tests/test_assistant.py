from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from pos_backend.core.errors import NotFoundError
from pos_backend.core.language import InMemoryStore, LanguageContext
from pos_backend.database.models.staff import AttendanceStatus
from pos_backend.services.assistant_service import (
    AssistantRule, AssistantSnapshot, RestaurantAssistant, quick_action_prompt
)


@dataclass
class Stock:
    name: str
    current_stock: Decimal
    min_level: Decimal


@dataclass
class PlacedOrder:
    total_amount: Decimal


@dataclass
class Attendance:
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    def is_on_duty(self) -> bool:
        return self.status == AttendanceStatus.PRESENT and self.check_in_time and not self.check_out_time


@pytest.fixture()
def snapshot():
    now = datetime.now(timezone.utc)
    return AssistantSnapshot(
        low_stock_items=[
            Stock("Rice", Decimal("0"), Decimal("10")),
            Stock("Cooking Oil", Decimal("2"), Decimal("5")),
            Stock("Gas Cylinder", Decimal("1"), Decimal("1")),
            Stock("Urad Dal", Decimal("0"), Decimal("3")),
        ],
        todays_orders=[PlacedOrder(Decimal("262.50")), PlacedOrder(Decimal("105.00"))],
        todays_attendance=[
            Attendance(AttendanceStatus.PRESENT, check_in_time=now),
            Attendance(AttendanceStatus.PRESENT, check_in_time=now, check_out_time=now),
            Attendance(AttendanceStatus.ABSENT),
        ],
        total_staff=8,
    )


def context(language="en"):
    ctx = LanguageContext(InMemoryStore())
    ctx.set_language(language)
    return ctx


def test_stock_question_counts_statuses_and_names_three_items(snapshot):
    intent, reply = RestaurantAssistant().reply("Which stock is low?", snapshot, context())
    assert intent == "stock"
    assert "2 items are out of stock" in reply
    assert "2 items are running low" in reply
    assert reply.endswith("Rice, Cooking Oil, Gas Cylinder")


def test_sales_question_reports_total_count_and_rounded_average(snapshot):
    intent, reply = RestaurantAssistant().reply("today's REVENUE please", snapshot, context())
    assert intent == "sales"
    assert "₹367.50" in reply
    assert "2 orders" in reply
    assert "₹184" in reply


def test_staff_question(snapshot):
    intent, reply = RestaurantAssistant().reply("attendance?", snapshot, context())
    assert intent == "staff"
    assert "2 out of 8" in reply
    assert "1 are absent" in reply
    assert "Currently 1 staff are on duty" in reply


def test_first_matching_rule_wins(snapshot):
    intent, _ = RestaurantAssistant().reply("staff sales and stock", snapshot, context())
    assert intent == "stock"
    intent, _ = RestaurantAssistant().reply("staff sales", snapshot, context())
    assert intent == "sales"


def test_tamil_keywords_match_and_reply_in_tamil(snapshot):
    intent, reply = RestaurantAssistant().reply("இன்றைய விற்பனை என்ன?", snapshot, context("ta"))
    assert intent == "sales"
    assert "ஆர்டர்கள்" in reply

    intent, _ = RestaurantAssistant().reply("ஊழியர் வருகை", snapshot, context("ta"))
    assert intent == "staff"


def test_unmatched_message_gets_help_text(snapshot):
    intent, reply = RestaurantAssistant().reply("hello there", snapshot, context())
    assert intent == "help"
    assert reply.startswith("I can help you with inventory status")


def test_no_orders_means_zero_average():
    _, reply = RestaurantAssistant().reply("sales", AssistantSnapshot(), context())
    assert "from 0 orders" in reply
    assert "₹0." in reply


def test_rules_are_data():
    rules = (AssistantRule("menu", ("menu",), lambda snapshot, ctx: "menu reply"),)
    assert RestaurantAssistant(rules).reply("show the menu", AssistantSnapshot(), context()) == ("menu", "menu reply")


def test_quick_action_prompts():
    assert quick_action_prompt("low-stock", context()) == "Show me items with low stock"
    assert quick_action_prompt("staff-summary", context("ta")) == "ஊழியர் வருகை சுருக்கம் தரவும்"
    with pytest.raises(NotFoundError):
        quick_action_prompt("refund", context())


# --- over HTTP ---

def test_assistant_chat_over_http(client, owner_headers, menu):
    response = client.post("/api/v1/assistant/chat", headers=owner_headers,
                           json={"message": "How are sales today?"})

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["intent"] == "sales"
    assert body["language"] == "en"


def test_assistant_quick_action_in_tamil(client, owner_headers):
    response = client.get("/api/v1/assistant/quick-actions/low-stock", headers=owner_headers,
                          params={"language": "ta"})
    assert response.json()["message"] == "குறைந்த சரக்கு உள்ள பொருள்களை காட்டு"

    missing = client.get("/api/v1/assistant/quick-actions/refunds", headers=owner_headers)
    assert missing.status_code == 404

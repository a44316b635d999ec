"""
Canned-response restaurant assistant

Keyword rules over a snapshot of today's data. No model is involved:
the first rule whose keyword appears in the message answers.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, NamedTuple, Optional, Sequence, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from pos_backend.core.billing import format_currency, to_decimal
from pos_backend.core.errors import NotFoundError
from pos_backend.core.i18n_logger import get_i18n_logger
from pos_backend.core.language import InMemoryStore, Language, LanguageContext
from pos_backend.core.stock import StockStatus, classify_stock
from pos_backend.database.models.staff import AttendanceStatus
from pos_backend.services.inventory_service import InventoryService
from pos_backend.services.order_service import OrderService
from pos_backend.services.staff_service import StaffService

logger = get_i18n_logger(__name__)

FALLBACK_INTENT = "help"


@dataclass
class AssistantSnapshot:
    """
    What the assistant knows when it answers.

    low_stock_items need current_stock, min_level and name; orders need
    total_amount; attendance records need status and is_on_duty().
    """
    low_stock_items: Sequence = field(default_factory=list)
    todays_orders: Sequence = field(default_factory=list)
    todays_attendance: Sequence = field(default_factory=list)
    total_staff: int = 0


Responder = Callable[[AssistantSnapshot, LanguageContext], str]


class AssistantRule(NamedTuple):
    intent: str
    keywords: Tuple[str, ...]
    responder: Responder

    def matches(self, message: str) -> bool:
        lowered = message.lower()
        return any(keyword in lowered for keyword in self.keywords)


def stock_reply(snapshot: AssistantSnapshot, ctx: LanguageContext) -> str:
    statuses = [
        classify_stock(item.current_stock, item.min_level) for item in snapshot.low_stock_items
    ]
    out_of_stock = statuses.count(StockStatus.OUT_OF_STOCK)
    low_stock = statuses.count(StockStatus.LOW_STOCK)
    names = ", ".join(item.name for item in list(snapshot.low_stock_items)[:3])
    return ctx.t(
        f"Currently {out_of_stock} items are out of stock and {low_stock} items are running low. "
        f"Items that need immediate restocking: {names}",
        f"தற்போது {out_of_stock} பொருள்கள் முற்றிலும் தீர்ந்துவிட்டன மற்றும் {low_stock} பொருள்கள் "
        f"குறைந்த அளவில் உள்ளன. உடனடியாக மீண்டும் ஸ்டாக் செய்ய வேண்டிய பொருள்கள்: {names}",
    )


def sales_reply(snapshot: AssistantSnapshot, ctx: LanguageContext) -> str:
    total = sum((to_decimal(order.total_amount) for order in snapshot.todays_orders), Decimal("0"))
    count = len(snapshot.todays_orders)
    average = (total / count).quantize(Decimal("1"), rounding=ROUND_HALF_UP) if count else 0
    total_text = format_currency(total)
    return ctx.t(
        f"Today's sales total {total_text} from {count} orders. Average order value is ₹{average}.",
        f"இன்று மொத்தம் {count} ஆர்டர்கள் மூலம் {total_text} விற்பனை ஆனது. "
        f"சராசரி ஆர்டர் மதிப்பு ₹{average} ஆகும்.",
    )


def staff_reply(snapshot: AssistantSnapshot, ctx: LanguageContext) -> str:
    present = sum(1 for r in snapshot.todays_attendance if r.status == AttendanceStatus.PRESENT)
    absent = sum(1 for r in snapshot.todays_attendance if r.status == AttendanceStatus.ABSENT)
    on_duty = sum(1 for r in snapshot.todays_attendance if r.is_on_duty())
    total = snapshot.total_staff
    return ctx.t(
        f"Today {present} out of {total} staff members are present. {absent} are absent. "
        f"Currently {on_duty} staff are on duty.",
        f"இன்று {total} ஊழியர்களில் {present} பேர் வந்துள்ளனர். {absent} பேர் வரவில்லை. "
        f"தற்போது {on_duty} பேர் பணியில் உள்ளனர்.",
    )


def help_reply(snapshot: AssistantSnapshot, ctx: LanguageContext) -> str:
    return ctx.t(
        "I can help you with inventory status, sales reports, staff management, and restaurant "
        "operations. Please ask me a specific question about these topics.",
        "நான் உங்களுக்கு சரக்கு நிலை, விற்பனை அறிக்கைகள், ஊழியர் மேலாண்மை மற்றும் உணவக "
        "செயல்பாடுகள் குறித்து உதவ முடியும். தயவுசெய்து குறிப்பிட்ட கேள்வி கேளுங்கள்.",
    )


# Order matters: "staff sales" is a sales question
DEFAULT_RULES: Tuple[AssistantRule, ...] = (
    AssistantRule("stock", ("stock", "inventory", "சரக்கு"), stock_reply),
    AssistantRule("sales", ("sales", "revenue", "விற்பனை"), sales_reply),
    AssistantRule("staff", ("staff", "attendance", "ஊழியர்"), staff_reply),
)

QUICK_ACTION_PROMPTS = {
    "low-stock": ("Show me items with low stock", "குறைந்த சரக்கு உள்ள பொருள்களை காட்டு"),
    "sales-analysis": ("Give me today's sales analysis", "இன்றைய விற்பனை பகுப்பாய்வு தரவும்"),
    "staff-summary": ("Give me staff attendance summary", "ஊழியர் வருகை சுருக்கம் தரவும்"),
}


def quick_action_prompt(action: str, ctx: LanguageContext) -> str:
    """
    Raises:
        NotFoundError: unknown quick action
    """
    if action not in QUICK_ACTION_PROMPTS:
        raise NotFoundError("Quick action", action)
    english, tamil = QUICK_ACTION_PROMPTS[action]
    return ctx.t(english, tamil)


class RestaurantAssistant:

    def __init__(self, rules: Sequence[AssistantRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def match(self, message: str) -> Optional[AssistantRule]:
        return next((rule for rule in self.rules if rule.matches(message)), None)

    def reply(self, message: str, snapshot: AssistantSnapshot, ctx: LanguageContext) -> Tuple[str, str]:
        """Returns (intent, reply text)"""
        rule = self.match(message)
        if rule is None:
            return FALLBACK_INTENT, help_reply(snapshot, ctx)
        return rule.intent, rule.responder(snapshot, ctx)


class AssistantService:

    @staticmethod
    async def build_snapshot(db: AsyncSession) -> AssistantSnapshot:
        return AssistantSnapshot(
            low_stock_items=await InventoryService.low_stock_items(db),
            todays_orders=await OrderService.list_today(db),
            todays_attendance=await StaffService.attendance_for(db),
            total_staff=await StaffService.count_active(db),
        )

    @staticmethod
    async def chat(db: AsyncSession, message: str, language: Language) -> Tuple[str, str]:
        ctx = LanguageContext(InMemoryStore())
        ctx.set_language(language)
        snapshot = await AssistantService.build_snapshot(db)
        intent, reply = RestaurantAssistant().reply(message, snapshot, ctx)
        logger.info("assistant.reply", intent=intent, reply_language=ctx.language.value)
        return intent, reply

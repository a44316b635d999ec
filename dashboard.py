"""
Streamlit dashboard for the restaurant: till, stock, expenses, staff,
QR tables, sales reports and the assistant chat.

Talks to the FastAPI backend over HTTP (API_BASE_URL). The order being
keyed in lives in the session as an OrderLineAggregator and is only
cleared once the backend has accepted it.

Run with:  streamlit run dashboard.py
"""

import io
from datetime import date, timedelta

import httpx
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from config import API_BASE_URL, CURRENCY_SYMBOL
from pos_backend.core.billing import BillingCalculator, OrderLineAggregator, format_currency
from pos_backend.core.language import LanguageContext, MappingStore
from pos_backend.core.stock import StockStatus
from pos_backend.schemas.menu_item import MenuItemResponse

st.set_page_config(page_title="Restaurant POS", layout="wide")

lang = LanguageContext(MappingStore(st.session_state))
t = lang.t

STOCK_BADGES = {
    StockStatus.OUT_OF_STOCK: ("🔴", "Out of Stock"),
    StockStatus.LOW_STOCK: ("🟡", "Low Stock"),
    StockStatus.IN_STOCK: ("🟢", "In Stock"),
}


# --- HTTP helpers ---

def api_request(method: str, path: str, **kwargs) -> httpx.Response:
    """Call the backend with the session token; pick up sliding refreshes"""
    headers = kwargs.pop("headers", {})
    token = st.session_state.get("token")
    if token:
        headers["Authorization"] = f"Bearer {token}"
    response = httpx.request(method, f"{API_BASE_URL}{path}", headers=headers, timeout=10.0, **kwargs)
    new_token = response.headers.get("X-New-Token")
    if new_token:
        st.session_state["token"] = new_token
    return response


def error_message(response: httpx.Response) -> str:
    try:
        return response.json().get("message", response.text)
    except ValueError:
        return response.text


def api_get(path: str, **params):
    """JSON body on success, None on any failure (caller shows a placeholder)"""
    try:
        response = api_request("GET", path, params=params or None)
    except httpx.HTTPError as e:
        st.warning(f"{t('Error')}: {e}")
        return None
    if response.status_code != 200:
        st.warning(f"{t('Error')}: {error_message(response)}")
        return None
    return response.json()


# --- Sidebar: language and login ---

st.sidebar.header(t("Restaurant Management System"))
if st.sidebar.button(f"{t('Language')}: {'தமிழ்' if lang.language == 'ta' else 'English'}"):
    lang.toggle_language()
    st.rerun()

if "token" not in st.session_state:
    with st.sidebar.form("login"):
        username = st.text_input(t("Username"))
        password = st.text_input(t("Password"), type="password")
        submitted = st.form_submit_button(t("Login"))
    if submitted:
        try:
            response = httpx.post(
                f"{API_BASE_URL}/auth/token",
                data={"username": username, "password": password},
                timeout=10.0,
            )
        except httpx.HTTPError as e:
            st.sidebar.error(str(e))
        else:
            if response.status_code == 200:
                body = response.json()
                st.session_state["token"] = body["access_token"]
                st.session_state["user"] = body["user"]
                st.rerun()
            else:
                st.sidebar.error(error_message(response))
    st.title(t("Restaurant Management System"))
    st.info(t("Login"))
    st.stop()

user = st.session_state.get("user", {})
st.sidebar.markdown(f"**{user.get('username', '')}** ({user.get('role', '')})")
if st.sidebar.button(t("Logout")):
    st.session_state.pop("token", None)
    st.session_state.pop("user", None)
    st.rerun()

PAGES = ["POS Billing", "Inventory", "Expenses", "Staff", "QR Menu", "Reports", "AI Assistant"]
page = st.sidebar.radio("Menu", PAGES, format_func=t)


# --- POS Billing ---

def pos_page():
    st.title(t("POS Billing System"))
    aggregator: OrderLineAggregator = st.session_state.setdefault("order_lines", OrderLineAggregator())

    items = api_get("/menu/items")
    menu_col, order_col = st.columns([2, 1])

    with menu_col:
        if items is None:
            st.info(t("No data available"))
        else:
            cols = st.columns(3)
            for i, raw in enumerate(items):
                item = MenuItemResponse.model_validate(raw)
                icon, label = STOCK_BADGES[item.stock_status]
                name = item.name_tamil if lang.language == "ta" and item.name_tamil else item.name
                with cols[i % 3]:
                    st.markdown(f"### {item.emoji or ''} {name}")
                    st.caption(f"{format_currency(item.price)} · {icon} {t(label)} ({item.current_stock})")
                    if st.button(t("Add"), key=f"add_{item.id}", disabled=item.stock_status == StockStatus.OUT_OF_STOCK):
                        aggregator.add_item(item)
                        st.rerun()

    with order_col:
        st.subheader(t("Current Order"))
        if aggregator.is_empty():
            st.info(t("No items in order"))

        for line in aggregator.lines:
            c1, c2, c3, c4 = st.columns([3, 1, 1, 1])
            c1.write(f"{line.name} × {line.quantity}")
            if c2.button("➖", key=f"dec_{line.menu_item_id}"):
                aggregator.change_quantity(line.menu_item_id, -1)
                st.rerun()
            if c3.button("➕", key=f"inc_{line.menu_item_id}"):
                aggregator.change_quantity(line.menu_item_id, 1)
                st.rerun()
            c4.write(format_currency(line.line_total))

        totals = aggregator.totals(BillingCalculator()).formatted(CURRENCY_SYMBOL)
        st.markdown("---")
        st.write(f"{t('Subtotal')}: {totals['subtotal']}")
        st.write(f"{t('Tax (5%)')}: {totals['tax']}")
        st.markdown(f"**{t('Total')}: {totals['total']}**")

        order_type = st.selectbox(t("Order Type"), ["dine-in", "takeaway", "qr"])
        payment_method = st.selectbox(t("Payment Method"), ["cash", "card", "upi"])
        table_number = st.number_input(t("Table Number"), min_value=0, step=1, value=0)

        b1, b2 = st.columns(2)
        if b1.button(t("Print Bill"), type="primary", disabled=aggregator.is_empty()):
            payload = {
                "order_type": order_type,
                "payment_method": payment_method,
                "table_number": int(table_number) or None,
                "lines": [
                    {
                        "menu_item_id": line.menu_item_id,
                        "name": line.name,
                        "price": str(line.price),
                        "quantity": line.quantity,
                    }
                    for line in aggregator.lines
                ],
            }
            try:
                response = api_request("POST", "/orders", json=payload)
            except httpx.HTTPError as e:
                st.error(f"{t('Failed to create order')}: {e}")
            else:
                if response.status_code == 201:
                    aggregator.clear()
                    st.success(f"{t('Order created successfully')}: {response.json()['order_number']}")
                else:
                    # Lines stay so the cashier can retry
                    st.error(f"{t('Failed to create order')}: {error_message(response)}")
        if b2.button(t("Clear Order")):
            aggregator.clear()
            st.rerun()


# --- Inventory ---

def inventory_page():
    st.title(t("Inventory Management"))
    items = api_get("/inventory")
    if not items:
        st.info(t("No data available"))
    else:
        df = pd.DataFrame(items)
        df["badge"] = df["stock_status"].map(lambda s: f"{STOCK_BADGES[StockStatus(s)][0]} {t(STOCK_BADGES[StockStatus(s)][1])}")
        st.dataframe(
            df[["name", "category", "current_stock", "unit", "min_level", "unit_price", "badge"]].rename(columns={
                "name": t("Item Name"), "category": t("Category"), "current_stock": t("Current Stock"),
                "min_level": t("Min Level"), "unit_price": t("Unit Price"), "badge": t("Status"),
            }),
            use_container_width=True,
        )

        with st.form("restock"):
            choice = st.selectbox(t("Item Name"), items, format_func=lambda i: f"{i['name']} ({i['current_stock']} {i['unit']})")
            quantity = st.number_input(t("Quantity"), min_value=0.01, value=1.0, step=0.5)
            if st.form_submit_button(t("Add")):
                response = api_request("POST", f"/inventory/{choice['id']}/restock", json={"quantity": str(quantity)})
                if response.status_code == 200:
                    st.rerun()
                st.error(error_message(response))

    low = api_get("/inventory/low-stock") or []
    if low:
        st.subheader(t("Low Stock"))
        for item in low:
            icon, label = STOCK_BADGES[StockStatus(item["stock_status"])]
            st.write(f"{icon} {item['name']}: {item['current_stock']} {item['unit']} ({t(label)})")


# --- Expenses ---

def expenses_page():
    st.title(t("Expense Management"))

    with st.form("expense"):
        description = st.text_input(t("Description"))
        category = st.selectbox(t("Category"), ["rent", "gas", "fuel", "salary", "groceries", "utilities", "other"])
        amount = st.number_input(t("Amount"), min_value=0.01, value=100.0, step=10.0)
        payment = st.selectbox(t("Payment Method"), ["cash", "bank_transfer", "upi", "card"])
        if st.form_submit_button(t("Add Expense")):
            response = api_request("POST", "/expenses", json={
                "description": description, "category": category,
                "amount": str(amount), "payment_method": payment,
            })
            if response.status_code == 201:
                st.rerun()
            st.error(error_message(response))

    today = date.today()
    summary = api_get(f"/expenses/monthly/{today.year}/{today.month}/summary")
    if summary and summary["categories"]:
        st.metric(t("This Month"), format_currency(summary["total"]))
        df = pd.DataFrame(summary["categories"])
        df["total"] = df["total"].astype(float)
        fig = go.Figure(go.Pie(labels=df["category"], values=df["total"], hole=0.4))
        fig.update_layout(template="plotly_white", title=t("Expenses"))
        st.plotly_chart(fig, use_container_width=True)

    st.subheader(t("Recent Expenses"))
    expenses = api_get("/expenses")
    if expenses:
        st.dataframe(pd.DataFrame(expenses)[["date", "description", "category", "amount", "payment_method"]], use_container_width=True)
    else:
        st.info(t("No data available"))


# --- Staff ---

def staff_page():
    st.title(t("Staff Management"))
    summary = api_get("/staff/attendance/today/summary")
    cols = st.columns(4)
    cols[0].metric(t("Total Staff"), summary["total_staff"] if summary else "—")
    cols[1].metric(t("Present Today"), summary["present"] if summary else "—")
    cols[2].metric(t("Absent Today"), summary["absent"] if summary else "—")
    cols[3].metric(t("On Duty"), summary["on_duty"] if summary else "—")

    staff = api_get("/staff") or []
    if not staff:
        st.info(t("No data available"))
        return

    st.dataframe(pd.DataFrame(staff)[["employee_id", "name", "role", "shift", "phone"]], use_container_width=True)

    with st.form("attendance"):
        member = st.selectbox(t("Name"), staff, format_func=lambda s: f"{s['name']} ({s['role']})")
        status = st.radio(t("Status"), ["present", "absent", "half-day"], horizontal=True)
        if st.form_submit_button(t("Save")):
            body = {"staff_id": member["id"], "status": status}
            if status == "present":
                body["check_in_time"] = pd.Timestamp.now(tz="UTC").isoformat()
            response = api_request("POST", "/staff/attendance", json=body)
            if response.status_code == 200:
                st.rerun()
            st.error(error_message(response))


# --- QR Menu ---

def qr_page():
    st.title(t("QR Menu System"))
    tables = api_get("/qr-tables") or []
    for table in tables:
        st.write(f"**{t('Table Number')} {table['table_number']}**: `{table['qr_code']}`")
    st.caption(t("Scan to view menu and place orders"))

    with st.form("qr_table"):
        number = st.number_input(t("Table Number"), min_value=1, step=1)
        if st.form_submit_button(t("Add")):
            response = api_request("POST", "/qr-tables", json={"table_number": int(number)})
            if response.status_code == 201:
                st.rerun()
            st.error(error_message(response))

    if tables:
        preview = st.selectbox(t("Digital Menu"), [tb["table_number"] for tb in tables])
        menu = api_get(f"/qr-tables/{preview}/menu")
        if menu:
            for category in menu["categories"]:
                st.subheader(category["name_tamil"] if lang.language == "ta" and category.get("name_tamil") else category["name"])
                for item in category["items"]:
                    st.write(f"{item.get('emoji') or ''} {item['name']} · {format_currency(item['price'])}")


# --- Reports ---

def reports_page():
    st.title(t("Sales Reports & Analytics"))
    c1, c2 = st.columns(2)
    start = c1.date_input("Start", value=date.today() - timedelta(days=6))
    end = c2.date_input("End", value=date.today())

    analytics = api_get("/analytics/sales", startDate=start.isoformat(), endDate=end.isoformat())
    cols = st.columns(3)
    if analytics is None:
        # Placeholders when the backend is unreachable
        for col, label in zip(cols, ["Total Sales", "Orders", "Avg Order Value"]):
            col.metric(t(label), "—")
        return

    cols[0].metric(t("Total Sales"), format_currency(analytics["totalSales"]))
    cols[1].metric(t("Orders"), analytics["totalOrders"])
    cols[2].metric(t("Avg Order Value"), format_currency(analytics["avgOrderValue"]))

    st.markdown("---")
    st.subheader(t("Top Selling Items"))
    top = pd.DataFrame(analytics["topSellingItems"])
    if top.empty:
        st.info(t("No data available"))
    else:
        top["revenue"] = top["revenue"].astype(float)
        fig = go.Figure()
        fig.add_trace(go.Bar(x=top["name"], y=top["quantity"], name=t("Quantity"), marker_color="darkblue"))
        fig.add_trace(go.Bar(x=top["name"], y=top["revenue"], name=f"{t('Amount')} ({CURRENCY_SYMBOL})",
                             marker_color="orange", yaxis="y2"))
        fig.update_layout(
            template="plotly_white",
            barmode="group",
            yaxis=dict(title=t("Quantity")),
            yaxis2=dict(title=CURRENCY_SYMBOL, overlaying="y", side="right"),
            legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        )
        st.plotly_chart(fig, use_container_width=True)

    st.subheader(t("Recent Transactions"))
    orders = pd.DataFrame(api_get("/orders") or [])
    if not orders.empty:
        orders = orders[["order_number", "created_at", "order_type", "payment_method", "total_amount", "status"]]
        st.dataframe(orders, use_container_width=True)

    # --- Excel download ---
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="xlsxwriter") as writer:
        pd.DataFrame([{
            "Start": start.isoformat(),
            "End": end.isoformat(),
            "Total Sales": float(analytics["totalSales"]),
            "Orders": analytics["totalOrders"],
            "Avg Order Value": float(analytics["avgOrderValue"]),
        }]).to_excel(writer, index=False, sheet_name="Summary")
        top.to_excel(writer, index=False, sheet_name="Top Selling")
        if not orders.empty:
            orders.to_excel(writer, index=False, sheet_name="Orders")

    st.download_button(
        label="Download Excel (.xlsx)",
        data=output.getvalue(),
        file_name=f"sales_{start.isoformat()}_{end.isoformat()}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


# --- AI Assistant ---

QUICK_ACTIONS = [("low-stock", "Check Low Stock"), ("sales-analysis", "Sales Analysis"), ("staff-summary", "Staff Summary")]


def assistant_page():
    st.title(t("AI Assistant"))
    history = st.session_state.setdefault("chat_history", [])

    st.subheader(t("Quick Actions"))
    prefill = None
    for col, (action, label) in zip(st.columns(len(QUICK_ACTIONS)), QUICK_ACTIONS):
        if col.button(t(label)):
            prompt = api_get(f"/assistant/quick-actions/{action}", language=lang.language.value)
            prefill = prompt["message"] if prompt else None

    st.subheader(t("Chat with AI Assistant"))
    for message in history:
        with st.chat_message(message["role"]):
            st.write(message["content"])

    text = st.chat_input(t("Type your message...")) or prefill
    if text:
        history.append({"role": "user", "content": text})
        try:
            # The server applies the reply delay itself
            with st.spinner(t("Loading")):
                response = api_request("POST", "/assistant/chat", json={"message": text, "language": lang.language.value})
        except httpx.HTTPError as e:
            history.append({"role": "assistant", "content": f"{t('Error')}: {e}"})
        else:
            reply = response.json().get("reply") if response.status_code == 200 else error_message(response)
            history.append({"role": "assistant", "content": reply})
        st.rerun()


PAGE_RENDERERS = {
    "POS Billing": pos_page,
    "Inventory": inventory_page,
    "Expenses": expenses_page,
    "Staff": staff_page,
    "QR Menu": qr_page,
    "Reports": reports_page,
    "AI Assistant": assistant_page,
}

PAGE_RENDERERS[page]()

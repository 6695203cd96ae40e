"""
Streamlit Frontend for Snacker

A thin consumer of AppState: every page reads derived views from the
state and calls its operations. No business logic lives here.

Flow:
1. Onboarding (first run only)
2. Username prompt
3. Main pages: Dashboard, Transactions, Categories, Profile
"""

import base64
from datetime import date, datetime, time
from typing import Optional

import streamlit as st

from snacker.bootstrap import create_app_state
from snacker.config import get_settings
from snacker.formatting import (
    CategoryIcon,
    category_label,
    format_currency,
    resolve_icon,
)
from snacker.models import (
    AppPhase,
    Category,
    CategoryDraft,
    Transaction,
    TransactionDraft,
    TransactionFilters,
    TransactionType,
)
from snacker.queries import bound_day, default_filters, filter_transactions
from snacker.state import AppState, provide_app_state, use_app_state


st.set_page_config(
    page_title="Snacker",
    page_icon="🥨",
    layout="wide",
    initial_sidebar_state="expanded",
)


ONBOARDING_STEPS = [
    (
        "🥨",
        "Welcome to Snacker!",
        "Your personal expense tracker to help you manage your finances with ease.",
    ),
    (
        "💸",
        "Track Income & Expenses",
        "Easily log your earnings and spendings. Categorize them for better insights.",
    ),
    (
        "📊",
        "Visualize Your Habits",
        "See where your money goes with simple charts and summaries.",
    ),
    (
        "🚀",
        "Ready to Start?",
        "Let's get your financial journey started with Snacker!",
    ),
]


@st.cache_resource
def get_app_state() -> AppState:
    """Get or create the application state (cached for the process)."""
    return create_app_state()


def money(amount: float) -> str:
    return format_currency(amount, get_settings().app.currency_symbol)


def main():
    """Main application entry point."""
    with provide_app_state(get_app_state()) as state:
        phase = state.phase

        if phase == AppPhase.LOADING:
            st.info("Loading Snacker...")
        elif phase == AppPhase.NEEDS_ONBOARDING:
            render_onboarding()
        elif phase == AppPhase.NEEDS_USERNAME:
            render_username_prompt()
        else:
            render_main_app()


def render_onboarding():
    step = st.session_state.setdefault("onboarding_step", 0)
    icon, title, description = ONBOARDING_STEPS[step]
    is_last = step == len(ONBOARDING_STEPS) - 1

    st.title(f"{icon} {title}")
    st.markdown(description)
    st.progress((step + 1) / len(ONBOARDING_STEPS))

    if st.button("Get Started" if is_last else "Next"):
        if is_last:
            use_app_state().mark_onboarding_complete()
            st.session_state.pop("onboarding_step", None)
        else:
            st.session_state["onboarding_step"] = step + 1
        st.rerun()


def render_username_prompt():
    st.title("What should we call you?")
    with st.form("username"):
        name = st.text_input("Your name", max_chars=50)
        if st.form_submit_button("Continue") and name.strip():
            use_app_state().set_username(name.strip())
            st.rerun()


def render_main_app():
    state = use_app_state()

    st.sidebar.title(f"🥨 Hi, {state.username}")
    st.sidebar.markdown("---")
    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "📋 Transactions", "🏷️ Categories", "👤 Profile"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard_page()
    elif page == "📋 Transactions":
        render_transactions_page()
    elif page == "🏷️ Categories":
        render_categories_page()
    else:
        render_profile_page()


def render_dashboard_page():
    state = use_app_state()
    st.title("📊 Dashboard")

    months = state.get_unique_months_with_transactions()
    current = date.today().replace(day=1)
    if current not in months:
        months = [current] + months
    month = st.selectbox(
        "Month",
        options=months,
        format_func=lambda d: d.strftime("%B %Y"),
    )

    summary = state.get_monthly_summary(month)
    col1, col2, col3 = st.columns(3)
    col1.metric("Income", money(summary.income))
    col2.metric("Expenses", money(summary.expenses))
    col3.metric("Balance", money(summary.balance))

    st.markdown("### Where the money went")
    distribution = state.get_monthly_expense_distribution(month)
    if not distribution:
        st.info("No expenses recorded for this month.")
    total = sum(s.value for s in distribution)
    for item in distribution:
        share = item.value / total if total else 0
        st.markdown(
            f"<span style='color:{item.fill}'>■</span> **{item.name}** "
            f"{money(item.value)} ({share:.0%})",
            unsafe_allow_html=True,
        )
        st.progress(share)


def render_transaction_form(
    existing: Optional[Transaction] = None,
    key_prefix: str = "add",
):
    """Add form, or a prefilled edit form when a transaction is given."""
    state = use_app_state()
    form_key = f"{key_prefix}-tx-{existing.id}" if existing else f"{key_prefix}-tx"
    kinds = list(TransactionType)

    kind = st.radio(
        "Type",
        options=kinds,
        index=kinds.index(existing.type) if existing else 0,
        format_func=lambda t: t.value.title(),
        horizontal=True,
        key=f"{form_key}-type",
    )
    options = [c for c in state.categories if c.type == kind]
    if not options:
        st.warning("Add a category of this type first.")
        return

    current_id = existing.category_id if existing else None
    category_index = next(
        (i for i, c in enumerate(options) if c.id == current_id), 0
    )

    with st.form(form_key, clear_on_submit=existing is None):
        amount = st.number_input(
            "Amount",
            min_value=0.01,
            value=max(existing.amount, 0.01) if existing else 0.01,
            step=1.0,
            format="%.2f",
            key=f"{form_key}-amount",
        )
        category = st.selectbox(
            "Category",
            options=options,
            index=category_index,
            format_func=lambda c: f"{resolve_icon(c.icon).glyph} {c.name}",
            key=f"{form_key}-category",
        )
        day = st.date_input(
            "Date",
            value=existing.date if existing else date.today(),
            key=f"{form_key}-date",
        )
        notes = st.text_input(
            "Notes",
            value=(existing.notes or "") if existing else "",
            key=f"{form_key}-notes",
        )
        favorite = (
            st.checkbox(
                "Mark as favorite",
                value=bool(existing.is_favorite) if existing else False,
                key=f"{form_key}-favorite",
            )
            if kind == TransactionType.EXPENSE
            else False
        )

        if existing is None:
            if st.form_submit_button("Add transaction", key=f"{form_key}-save"):
                state.add_transaction(
                    TransactionDraft(
                        type=kind,
                        amount=amount,
                        category_id=category.id,
                        date=day,
                        notes=notes or None,
                        is_favorite=favorite or None,
                    )
                )
                st.toast("Transaction added.")
                st.rerun()
            return

        save, cancel = st.columns(2)
        if save.form_submit_button("Save changes", key=f"{form_key}-save"):
            state.update_transaction(
                existing.model_copy(
                    update={
                        "type": kind,
                        "amount": amount,
                        "category_id": category.id,
                        "date": day,
                        "notes": notes or None,
                        "is_favorite": favorite or None,
                    }
                )
            )
            st.session_state.pop("editing_transaction", None)
            st.toast("Transaction updated.")
            st.rerun()
        if cancel.form_submit_button("Cancel", key=f"{form_key}-cancel"):
            st.session_state.pop("editing_transaction", None)
            st.rerun()


def render_transaction_row(transaction: Transaction, key_prefix: str):
    state = use_app_state()
    category = state.get_category_by_id(transaction.category_id)
    icon = resolve_icon(category.icon if category else None)
    sign = "+" if transaction.type == TransactionType.INCOME else "-"
    star = " ⭐" if transaction.is_favorite and transaction.type == TransactionType.EXPENSE else ""

    col1, col2, col3 = st.columns([5, 1, 1])
    col1.markdown(
        f"{icon.glyph} **{category_label(category)}**{star} · "
        f"{transaction.date.isoformat()} · {sign}{money(transaction.amount)}"
        + (f"  \n_{transaction.notes}_" if transaction.notes else "")
    )
    if col2.button("Edit", key=f"{key_prefix}-edit-tx-{transaction.id}"):
        st.session_state["editing_transaction"] = (key_prefix, transaction.id)
        st.rerun()
    if col3.button("Delete", key=f"{key_prefix}-del-tx-{transaction.id}"):
        state.delete_transaction(transaction.id)
        st.rerun()

    if st.session_state.get("editing_transaction") == (key_prefix, transaction.id):
        with st.container(border=True):
            render_transaction_form(transaction, key_prefix=key_prefix)


def render_transactions_page():
    st.title("📋 Transactions")

    with st.expander("➕ Add transaction"):
        render_transaction_form()

    list_tab, day_tab = st.tabs(["📋 List", "📅 By day"])
    with list_tab:
        render_transaction_list()
    with day_tab:
        render_day_view()


def render_transaction_list():
    state = use_app_state()
    saved = state.transaction_page_filters or default_filters(date.today())

    col1, col2, col3 = st.columns(3)
    with col1:
        kind = st.selectbox(
            "Type",
            options=["all", "income", "expense"],
            index=["all", "income", "expense"].index(saved.type or "all"),
        )
    with col2:
        category_ids = [None] + [c.id for c in state.categories]
        category_id = st.selectbox(
            "Category",
            options=category_ids,
            index=category_ids.index(saved.category_id)
            if saved.category_id in category_ids
            else 0,
            format_func=lambda cid: "All Categories"
            if cid is None
            else category_label(state.get_category_by_id(cid)),
        )
    with col3:
        search = st.text_input("Search notes or amount", value=saved.search_term or "")

    default_range = (
        bound_day(saved.date_from) or date.today().replace(day=1),
        bound_day(saved.date_to) or date.today(),
    )
    date_range = st.date_input("Date range", value=default_range)

    filters = TransactionFilters(
        type=kind,
        category_id=category_id,
        date_from=saved.date_from,
        date_to=saved.date_to,
        search_term=search or None,
    )
    # date_input returns a 1-tuple while the user is mid-selection
    if isinstance(date_range, tuple) and len(date_range) == 2:
        start, end = date_range
        filters = filters.model_copy(
            update={
                "date_from": datetime.combine(start, time.min),
                "date_to": datetime.combine(end, time.max),
            }
        )

    if filters != state.transaction_page_filters:
        state.save_filter_preferences(filters)

    st.markdown("---")
    shown = filter_transactions(state.transactions, filters)
    if not shown:
        st.info("No transactions match your current filters.")
    else:
        st.caption(f"Showing {len(shown)} transaction(s).")

    for transaction in shown:
        render_transaction_row(transaction, key_prefix="list")


def render_day_view():
    state = use_app_state()
    day = st.date_input("Day", value=date.today(), key="day-view")

    st.markdown(f"### Transactions for {day:%B} {day.day}, {day.year}")
    daily = state.get_transactions_by_date(day)
    if not daily:
        st.info("No transactions on this day.")
    for transaction in daily:
        render_transaction_row(transaction, key_prefix="day")


def render_category_edit_form(category: Category):
    """Rename a category or change its icon. The type is fixed at creation."""
    state = use_app_state()
    icons = list(CategoryIcon)

    form_key = f"edit-cat-{category.id}"
    with st.form(form_key):
        name = st.text_input(
            "Name", value=category.name, max_chars=50, key=f"{form_key}-name"
        )
        icon = st.selectbox(
            "Icon",
            options=icons,
            index=icons.index(resolve_icon(category.icon)),
            format_func=lambda i: f"{i.glyph} {i.value}",
            key=f"{form_key}-icon",
        )
        save, cancel = st.columns(2)
        if save.form_submit_button("Save changes", key=f"{form_key}-save") and name.strip():
            state.update_category(
                category.model_copy(update={"name": name.strip(), "icon": icon.value})
            )
            st.session_state.pop("editing_category", None)
            st.toast("Category updated.")
            st.rerun()
        if cancel.form_submit_button("Cancel", key=f"{form_key}-cancel"):
            st.session_state.pop("editing_category", None)
            st.rerun()


def render_categories_page():
    state = use_app_state()
    st.title("🏷️ Categories")

    icons = list(CategoryIcon)
    with st.form("add_category", clear_on_submit=True):
        name = st.text_input("Name", max_chars=50)
        kind = st.radio(
            "Type",
            options=list(TransactionType),
            format_func=lambda t: t.value.title(),
            horizontal=True,
        )
        icon = st.selectbox(
            "Icon",
            options=icons,
            index=icons.index(CategoryIcon.TAG),
            format_func=lambda i: f"{i.glyph} {i.value}",
        )
        if st.form_submit_button("Add category") and name.strip():
            state.add_category(
                CategoryDraft(name=name.strip(), type=kind, icon=icon.value)
            )
            st.rerun()

    for kind in TransactionType:
        st.markdown(f"### {kind.value.title()}")
        for category in [c for c in state.categories if c.type == kind]:
            col1, col2, col3 = st.columns([5, 1, 1])
            col1.markdown(f"{resolve_icon(category.icon).glyph} {category.name}")
            if col2.button("Edit", key=f"edit-cat-btn-{category.id}"):
                st.session_state["editing_category"] = category.id
                st.rerun()
            if col3.button("Delete", key=f"del-cat-{category.id}"):
                state.delete_category(category.id)
                st.rerun()
            if st.session_state.get("editing_category") == category.id:
                render_category_edit_form(category)


def render_profile_page():
    state = use_app_state()
    st.title("👤 Profile")

    if state.profile_picture_data_uri:
        st.image(state.profile_picture_data_uri, width=120)

    upload = st.file_uploader("Profile picture", type=["png", "jpg", "jpeg", "webp"])
    if upload is not None:
        encoded = base64.b64encode(upload.getvalue()).decode("ascii")
        data_uri = f"data:{upload.type};base64,{encoded}"
        if data_uri != state.profile_picture_data_uri:
            state.set_profile_picture(data_uri)
            st.rerun()

    with st.form("rename"):
        name = st.text_input("Username", value=state.username or "", max_chars=50)
        if st.form_submit_button("Save") and name.strip():
            state.set_username(name.strip())
            st.rerun()

    st.markdown("---")
    st.markdown("### Danger zone")
    confirm = st.checkbox("I understand this erases all my data")
    if st.button("Reset application data", disabled=not confirm):
        state.reset_application_data()
        get_app_state.clear()
        st.rerun()


if __name__ == "__main__":
    main()

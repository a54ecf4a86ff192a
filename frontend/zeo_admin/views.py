"""Streamlit building blocks shared by the admin pages."""

import streamlit as st
import pandas as pd
from typing import Any, Callable, Dict, List, Optional

from zeo_admin.api_client import api_client
from zeo_admin.auth import check_api_response
from zeo_admin.listing import ASC, ListConfig, ListState, ListView, Paginator, apply
from zeo_admin.resources import DebouncedSync, MutationDispatcher, ResourceList


def get_resource_list(resource: str) -> ResourceList:
    """Per-session ``ResourceList``, fetched on first use."""
    key = f"resource_{resource}"
    if key not in st.session_state:
        resources = ResourceList(api_client, resource)
        resources.fetch()
        st.session_state[key] = resources
    return st.session_state[key]


def get_dispatcher(resource: str) -> MutationDispatcher:
    key = f"dispatcher_{resource}"
    if key not in st.session_state:
        st.session_state[key] = MutationDispatcher(get_resource_list(resource))
    return st.session_state[key]


def get_sync(resource: str, save) -> DebouncedSync:
    key = f"sync_{resource}"
    if key not in st.session_state:
        st.session_state[key] = DebouncedSync(get_resource_list(resource), save)
    return st.session_state[key]


def get_list_state(config: ListConfig) -> ListState:
    key = f"list_state_{config.resource}"
    if key not in st.session_state:
        st.session_state[key] = config.new_state()
    return st.session_state[key]


def show_fetch_error(resources: ResourceList) -> bool:
    """Show the last fetch or sync error with a retry button. True if there was one."""
    if not resources.error:
        return False
    st.error(resources.error)
    if st.button("🔄 Retry", key=f"retry_{resources.resource}"):
        resources.fetch()
        st.rerun()
    return True


def render_list_controls(config: ListConfig, state: ListState, items: List[Dict[str, Any]]):
    """Search box, one select box per filter and the sort selector."""
    columns = st.columns([3] + [1] * len(config.filters) + [1, 1])

    with columns[0]:
        term = st.text_input(
            f"🔍 Search {config.label}",
            value=state.search,
            key=f"search_{config.resource}"
        )
        state.set_search(term)

    for column, name in zip(columns[1:], config.filters):
        with column:
            options = [""] + config.filter_options(items, name)
            current = state.filters.get(name, "")
            value = st.selectbox(
                name.title(),
                options,
                index=options.index(current) if current in options else 0,
                format_func=lambda option: "All" if option == "" else str(option),
                key=f"filter_{config.resource}_{name}"
            )
            state.set_filter(name, value)

    with columns[-2]:
        fields = config.sort_choices()
        field = st.selectbox(
            "Sort by",
            fields,
            index=fields.index(state.sort.field) if state.sort.field in fields else 0,
            format_func=lambda option: "Default order" if option is None else option.replace("_", " ").title(),
            key=f"sort_{config.resource}"
        )
        state.choose_sort(field)

    with columns[-1]:
        arrow = "▲" if state.sort.direction == ASC else "▼"
        st.write("")
        if st.button(f"{arrow} Order", disabled=state.sort.field is None, key=f"direction_{config.resource}"):
            state.toggle_sort(state.sort.field)
            st.rerun()


def render_pagination(config: ListConfig, state: ListState, view: ListView):
    info = view.info
    if info.total_pages <= 1:
        return

    st.caption(f"Showing {info.start_item} to {info.end_item} of {info.total_items} {config.label}")
    columns = st.columns(len(info.page_numbers) + 2)

    with columns[0]:
        if st.button("◀ Previous", disabled=not info.has_previous, key=f"prev_{config.resource}"):
            state.go_to(Paginator.previous(state.page))
            st.rerun()

    for column, number in zip(columns[1:-1], info.page_numbers):
        with column:
            button_type = "primary" if number == info.page else "secondary"
            if st.button(str(number), type=button_type, key=f"page_{config.resource}_{number}"):
                state.go_to(number)
                st.rerun()

    with columns[-1]:
        if st.button("Next ▶", disabled=not info.has_next, key=f"next_{config.resource}"):
            state.go_to(Paginator(config.items_per_page).next(state.page, info.total_items))
            st.rerun()


def to_dataframe(items: List[Dict[str, Any]], columns: Dict[str, Callable[[Dict[str, Any]], Any]]) -> pd.DataFrame:
    """Table rows built from ``{column title: accessor}``."""
    return pd.DataFrame([{title: accessor(item) for title, accessor in columns.items()} for item in items])


def render_list(
    config: ListConfig,
    columns: Dict[str, Callable[[Dict[str, Any]], Any]],
    items: Optional[List[Dict[str, Any]]] = None
) -> ListView:
    """Controls, the current page as a table and the pagination bar."""
    resources = get_resource_list(config.resource)
    items = resources.items if items is None else items
    state = get_list_state(config)

    render_list_controls(config, state, items)
    view = apply(config, state, items)

    if not view.items:
        st.info(f"No {config.label} match your search criteria." if items else f"No {config.label} yet.")
    else:
        st.dataframe(to_dataframe(view.items, columns), use_container_width=True, hide_index=True)

    render_pagination(config, state, view)
    return view


def select_item(label: str, items: List[Dict[str, Any]], title_field: str = "title", key: str = "") -> Optional[Dict[str, Any]]:
    """Select box over ``items``; returns the chosen record or None."""
    options = [None] + [item["id"] for item in items]
    titles = {item["id"]: item.get(title_field) or item.get("name") or item["id"] for item in items}
    selected = st.selectbox(
        label,
        options,
        format_func=lambda option: "Select..." if option is None else f"{titles[option]} ({option})",
        key=key or f"select_{label}"
    )
    return next((item for item in items if item["id"] == selected), None)


def confirm_delete(resource: str, item: Dict[str, Any], name: str):
    """Two-step delete with a confirmation prompt."""
    state_key = f"delete_{resource}_id"
    if st.button("🗑️ Delete", type="secondary", key=f"delete_{resource}_{item['id']}"):
        st.session_state[state_key] = item["id"]
        st.rerun()

    if st.session_state.get(state_key) == item["id"]:
        st.warning(f"⚠️ Are you sure you want to delete '{name}'?")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("✅ Yes, Delete", key=f"confirm_delete_{resource}"):
                response = get_dispatcher(resource).delete(item["id"])
                del st.session_state[state_key]
                if check_api_response(response):
                    st.success("✅ Deleted successfully!")
                    st.rerun()
        with col2:
            if st.button("❌ Cancel", key=f"cancel_delete_{resource}"):
                del st.session_state[state_key]
                st.rerun()


def page_setup(title: str, icon: str):
    st.set_page_config(
        page_title=f"{title} - Zeo Tourism Admin",
        page_icon=icon,
        layout="wide"
    )


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]

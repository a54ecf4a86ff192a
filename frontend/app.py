import streamlit as st
from zeo_admin.auth import init_session_state, logout, get_current_user, show_login_form
from zeo_admin.api_client import api_client
from zeo_admin.config import PAGE_TITLE, PAGE_ICON, LAYOUT

# Page configuration
st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT,
    initial_sidebar_state="expanded"
)

# Initialize session state
init_session_state()

# Custom CSS for better styling
st.markdown("""
<style>
    .main-header {
        text-align: center;
        padding: 2rem 0;
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f4e79;
        margin-bottom: 1rem;
    }

    .metric-card {
        background: white;
        padding: 1rem;
        border-radius: 8px;
        box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        text-align: center;
    }
</style>
""", unsafe_allow_html=True)

SECTIONS = [
    ("🗺️ Tours", "tours"),
    ("🏔️ Destinations", "destinations"),
    ("🧗 Activities", "activities"),
    ("📨 Enquiries", "enquiries"),
    ("⭐ Testimonials", "testimonials"),
    ("📝 Blog", "posts"),
    ("👥 Team", "team"),
    ("🎞️ Sliders", "sliders"),
    ("🖼️ Gallery", "gallery"),
    ("🧭 Trip Plans", "trip_plans"),
]

# Sidebar
with st.sidebar:
    if st.session_state.authenticated:
        user_info = get_current_user()
        if user_info:
            st.markdown(f"**👤 {user_info.get('name', 'Admin')}**  \n{user_info.get('email', '')}")

        if st.button("🚪 Logout", use_container_width=True):
            logout()
            st.rerun()

        st.markdown("---")

    # Get API health
    health_response = api_client.get_health()
    if health_response.get("success"):
        st.success("🟢 API Online")
    else:
        st.error(f"🔴 API Offline: {health_response['error']}")

# Main content
st.markdown('<h1 class="main-header">🏔️ Zeo Tourism Admin</h1>', unsafe_allow_html=True)

if st.session_state.authenticated:
    st.markdown("Manage the website content from the pages in the sidebar.")

    st.subheader("📊 Content Overview")
    if health_response.get("success"):
        counts = health_response["data"].get("dataLoaded", {})
        for row_start in range(0, len(SECTIONS), 3):
            columns = st.columns(3)
            for column, (title, name) in zip(columns, SECTIONS[row_start:row_start + 3]):
                with column:
                    st.markdown(f"""
                    <div class="metric-card">
                        <h3>{counts.get(name, 0)}</h3>
                        <p>{title}</p>
                    </div>
                    """, unsafe_allow_html=True)
    else:
        st.warning("Content counts are unavailable while the API is offline.")
else:
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        show_login_form()

# Footer
st.markdown("---")
st.markdown("""
<div style="text-align: center; color: #666; padding: 1rem;">
    <p>Zeo Tourism Admin | Streamlit and FastAPI</p>
</div>
""", unsafe_allow_html=True)

import streamlit as st

from autodb import config
from autodb.diagram_html import diagram_to_html
from autodb.errors import NoSchemaError
from autodb.generator import SchemaGenerator
from autodb.handlers import SchemaSession
from autodb.view import TAB_LABELS, Tab

CODE_LANGUAGES = {Tab.SQL: "sql", Tab.MODELS: "python", Tab.JSON: "json"}


@st.cache_resource
def get_generator() -> SchemaGenerator:
    config.configure_logging()
    return SchemaGenerator()


def run_generation():
    result = st.session_state.session.handle_generate(st.session_state.prompt, get_generator())
    st.session_state.error = None if result["success"] else result["error"]


def use_example(example: str):
    st.session_state.prompt = example


def select_tab():
    st.session_state.session.view.select(st.session_state.tab)


# ============== STREAMLIT CONFIG ==============

st.set_page_config(page_title="AutoDB Architect", page_icon="⚡", layout="wide")

# ============== INITIALIZE STATE ==============

if "session" not in st.session_state:
    st.session_state.session = SchemaSession()
if "prompt" not in st.session_state:
    st.session_state.prompt = ""
if "error" not in st.session_state:
    st.session_state.error = None

session: SchemaSession = st.session_state.session

# ============== HEADER ==============

st.title("AutoDB Architect")
st.caption("Describe a business domain and get a database design")

# ============== PROMPT ==============

st.text_area("System description", key="prompt", height=120)

cols = st.columns(len(config.EXAMPLE_PROMPTS))
for i, example in enumerate(config.EXAMPLE_PROMPTS):
    with cols[i]:
        st.button(example[:40], key=f"example_{i}", on_click=use_example, args=(example,), use_container_width=True)

st.button("Generate System", type="primary", on_click=run_generation)

if st.session_state.error:
    st.error(st.session_state.error)

# ============== RESULTS ==============

if session.schema is None:
    st.info("Your schema will appear here once generated")
else:
    # Keep the radio in step with the controller (a new schema resets to ERD)
    st.session_state.tab = session.view.active_tab
    st.radio(
        "View",
        options=list(Tab),
        format_func=lambda tab: TAB_LABELS[tab],
        key="tab",
        horizontal=True,
        on_change=select_tab,
        label_visibility="collapsed",
    )

    content = session.view.content
    if session.view.active_tab == Tab.ERD:
        st.components.v1.html(diagram_to_html(content), height=640, scrolling=True)
    else:
        st.code(content, language=CODE_LANGUAGES[session.view.active_tab])

    # ============== EXPORT ==============

    sql_col, json_col = st.columns(2)
    for col, kind, label in ((sql_col, "sql", "Download SQL"), (json_col, "json", "Download JSON")):
        with col:
            try:
                file = session.handle_export(kind)
            except NoSchemaError as e:
                st.warning(str(e))
                continue
            st.download_button(
                label=label,
                data=file.content,
                file_name=file.filename,
                mime=file.media_type,
                use_container_width=True,
            )

"""
EchoLab - English Listening and Review Companion

Streamlit dashboard for the Ebbinghaus review queue: see what is due,
run a review session, import materials, collect new words and sentence
patterns from them, and practise the synced sentences.

Usage:
    streamlit run app.py
"""

import logging
import time

import streamlit as st
from dotenv import load_dotenv

from echolab.classroom import ContentClassifier, MaterialLibrary, ReviewStore
from echolab.review import build_queue, count_due
from echolab.schemas import TaskKind
from echolab.viewer import get_review_css, render_review_list


load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)

st.set_page_config(
    page_title="EchoLab",
    page_icon="🎧",
    layout="wide",
)


def now_ms() -> int:
    return int(time.time() * 1000)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "store" not in st.session_state:
        st.session_state.store = ReviewStore()

    if "classifier" not in st.session_state:
        st.session_state.classifier = ContentClassifier()

    if "library" not in st.session_state:
        st.session_state.library = MaterialLibrary(
            st.session_state.store, st.session_state.classifier
        )

    if "translations" not in st.session_state:
        st.session_state.translations = {}


# -----------------------------------------------------------------------------
# Review Section
# -----------------------------------------------------------------------------

def render_review_section():
    """Render due badge, queue head and the start-review action."""
    store = st.session_state.store
    now = now_ms()

    queue = build_queue(store.load(TaskKind.WORD), store.load(TaskKind.GRAMMAR))
    due = count_due(queue, now)

    st.subheader("Ebbinghaus Review")
    st.metric("Due now", due)

    st.markdown(get_review_css(), unsafe_allow_html=True)
    st.markdown(render_review_list(queue, now), unsafe_allow_html=True)

    if st.button("Start review", disabled=due == 0, use_container_width=True):
        advanced = store.start_review(now_ms())
        st.success(f"Completed {advanced} review tasks. Memory curve updated.")
        st.rerun()


# -----------------------------------------------------------------------------
# Import Section
# -----------------------------------------------------------------------------

def render_import_section():
    """Render text, link and file import forms."""
    library = st.session_state.library

    st.subheader("Import material")
    tab_text, tab_link, tab_file = st.tabs(["Text", "Link", "File"])

    with tab_text:
        with st.form("import_text", clear_on_submit=True):
            title = st.text_input("Title", value="Text Material")
            text = st.text_area("Paste English text")
            if st.form_submit_button("Import text") and text.strip():
                with st.spinner("Classifying..."):
                    material = library.import_text(text.strip(), now_ms(), title=title or "Text Material")
                st.success(f"Imported {material.title} ({material.topic}, {material.difficulty.value})")

    with tab_link:
        with st.form("import_link", clear_on_submit=True):
            url = st.text_input("Video URL")
            if st.form_submit_button("Import link") and url.strip():
                with st.spinner("Classifying..."):
                    material = library.import_link(url.strip(), now_ms())
                st.success(f"Imported {material.title} ({material.topic})")

    with tab_file:
        with st.form("import_file", clear_on_submit=True):
            upload = st.file_uploader("Audio, video or .txt file", type=["mp3", "wav", "m4a", "mp4", "webm", "txt"])
            if st.form_submit_button("Import file") and upload is not None:
                content_type = upload.type or "application/octet-stream"
                text = None
                if content_type == "text/plain":
                    text = upload.getvalue().decode("utf-8", errors="replace")
                with st.spinner("Classifying..."):
                    material = library.import_file(upload.name, content_type, now_ms(), text=text)
                st.success(f"Imported {material.title} ({material.type.value})")


# -----------------------------------------------------------------------------
# Study Section
# -----------------------------------------------------------------------------

def select_material():
    """Material picker shared by the study tabs; None when the library is empty."""
    materials = st.session_state.store.get_materials()
    if not materials:
        st.info("Import a material to start studying.")
        return None
    return st.selectbox(
        "Material",
        materials,
        format_func=lambda m: f"{m.title} · {m.topic} · {m.difficulty.value}",
    )


def render_study_section():
    """Render transcript editing, word/sentence collection and sync."""
    store = st.session_state.store
    classifier = st.session_state.classifier
    library = st.session_state.library

    st.subheader("Study")
    material = select_material()
    if material is None:
        return

    with st.expander("Transcript", expanded=not material.transcript):
        with st.form(f"transcript_{material.id}"):
            transcript = st.text_area("Transcript", value=material.transcript, height=200)
            if st.form_submit_button("Save transcript"):
                library.attach_transcript(material.id, transcript)
                st.rerun()

    tab_word, tab_sentence = st.tabs(["Word", "Sentence"])

    with tab_word:
        with st.form("collect_word", clear_on_submit=True):
            word = st.text_input("Word")
            if st.form_submit_button("Save word") and word.strip():
                analysis = classifier.analyze_word(word.strip(), material.transcript or material.title)
                store.add_vocabulary(
                    word.strip(),
                    now_ms(),
                    context=material.title,
                    definition=analysis.definition or "Pending...",
                    translation=analysis.translation or "Pending...",
                )
                st.success(f"Saved word: {word.strip()}")

    with tab_sentence:
        with st.form("collect_sentence", clear_on_submit=True):
            sentence = st.text_area("Sentence")
            rule = st.text_input("Rule", value="User Collected")
            if st.form_submit_button("Save sentence") and sentence.strip():
                store.add_grammar(
                    sentence.strip(),
                    now_ms(),
                    rule=rule,
                    explanation=f"Saved from {material.title}",
                )
                st.success("Saved sentence pattern")

    if st.button("Complete & sync to speaking", disabled=not material.transcript):
        library.sync_speaking_sentences(material)
        st.success("Sentences added to speaking practice.")


# -----------------------------------------------------------------------------
# Speaking Section
# -----------------------------------------------------------------------------

def render_speaking_section():
    """Render shadowing sentences with on-demand translation."""
    classifier = st.session_state.classifier
    translations = st.session_state.translations

    st.subheader("Speaking practice")
    for i, sentence in enumerate(st.session_state.store.get_speaking_sentences()):
        col_text, col_action = st.columns([5, 1])
        with col_text:
            st.markdown(sentence)
            if sentence in translations:
                st.caption(translations[sentence])
        with col_action:
            if st.button("Translate", key=f"translate_{i}"):
                translations[sentence] = classifier.translate(sentence)
                st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    st.title("🎧 EchoLab")

    col1, col2 = st.columns([3, 2])
    with col1:
        render_review_section()
        render_speaking_section()
    with col2:
        render_import_section()
        render_study_section()


if __name__ == "__main__":
    main()

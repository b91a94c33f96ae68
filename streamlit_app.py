# ruff: noqa: I001
import streamlit as st

from config import get_settings
from relay_client import RelayClient
from schemas import StoryLength, StoryTone
from storage import LocalStorage
from story_client import StoryClient
import app_state

st.set_page_config(page_title="Starlight Weaver", page_icon="✨", layout="centered")

if "client" not in st.session_state:
    settings = get_settings()
    st.session_state.client = StoryClient(
        RelayClient(settings.backend_url),
        LocalStorage(settings.storage_path),
    )
client: StoryClient = st.session_state.client

title_col, clear_col = st.columns([4, 1])
with title_col:
    st.title("Starlight Weaver")
with clear_col:
    if st.button("Clear All", help="Clear all inputs and generated story"):
        client.reset_all()
        st.rerun()

state = client.state
prompt = st.text_area("Main Idea/Plot (Optional)", value=state.prompt)
main_character = st.text_input("Main Character (Optional)", value=state.main_character)
setting = st.text_input("Setting (Optional)", value=state.setting)
conflict = st.text_input("Conflict (Optional)", value=state.conflict)
lengths = list(StoryLength)
tones = list(StoryTone)
length = st.selectbox("Story Length", lengths, index=lengths.index(state.length), format_func=lambda v: v.value)
tone = st.selectbox("Story Tone", tones, index=tones.index(state.tone), format_func=lambda v: v.value)
client.update_fields(
    prompt=prompt,
    main_character=main_character,
    setting=setting,
    conflict=conflict,
    length=length,
    tone=tone,
)

if st.button("Generate Story", disabled=not app_state.can_generate(client.state)):
    with st.spinner("Weaving your story..."):
        client.submit_generation()

if st.button("Random Prompt", disabled=client.state.is_loading):
    with st.spinner("Dreaming up a prompt..."):
        client.request_random_prompt()
    st.rerun()

state = client.state
if state.error:
    st.error(state.error)

if state.story:
    st.subheader(state.story_title)
    st.write(state.story)
    copy_col, save_col = st.columns(2)
    with copy_col:
        with st.popover("Copy Story"):
            st.code(client.clipboard_text(), language=None)
    with save_col:
        if st.button("Save Story"):
            st.toast(client.persist_current_story())

saved_stories = client.state.saved_stories
with st.expander(f"Saved Stories ({len(saved_stories)})"):
    if not saved_stories:
        st.caption("No stories saved yet.")
    for saved in saved_stories:
        info_col, load_col, delete_col = st.columns([4, 1, 1])
        with info_col:
            st.markdown(f"**{saved.title}**  \n{saved.date}")
        with load_col:
            if st.button("Load", key=f"load-{saved.id}"):
                client.load_saved_story(saved.id)
                st.rerun()
        with delete_col:
            if st.button("Delete", key=f"delete-{saved.id}"):
                client.delete_saved_story(saved.id)
                st.rerun()

import matplotlib
matplotlib.use("Agg")

import streamlit as st
import matplotlib.pyplot as plt
import logging

from mindwell.ai_client import ModelGateway
from mindwell.aggregation import recent_entries, summarize_windows, trend_series
from mindwell.cards import entry_card, for_mood_banner, text_card
from mindwell.charts import distribution_figure, trend_figure
from mindwell.chat import QUICK_PICKS
from mindwell.classifier import classify_from_image, classify_from_text, transcribe_audio
from mindwell.config import ConfigError, load_settings
from mindwell.log import configure_logging
from mindwell.models import MoodSource, Sender
from mindwell.recommendations import (
    get_recommendations, spotify_search_url, video_section_title, youtube_search_url,
)
from mindwell.state import AppState

logger = logging.getLogger("mindwell.app")

# ===============================
# PAGE CONFIG
# ===============================

st.set_page_config(
    page_title="MindWell",
    page_icon="🧠",
    layout="centered"
)

# ===============================
# CUSTOM CSS
# ===============================

st.markdown("""
<style>
.stApp { background-color: #f8f9fa; color: #212529; }
.mood-card { background: white; border-left: 4px solid #8A3FFC;
             border-radius: 8px; padding: 12px 15px; margin: 8px 0;
             box-shadow: 0 2px 8px rgba(0,0,0,0.08); }
.alert-box { background: #fee2e2; border: 1px solid #fca5a5; color: #991b1b;
             border-radius: 15px; padding: 15px; margin: 10px 0; }
.for-mood { background: #cffafe; border-radius: 12px; padding: 12px;
            text-align: center; margin: 10px 0; }
</style>
""", unsafe_allow_html=True)

# ===============================
# SETTINGS + GROQ GATEWAY
# ===============================

try:
    settings = load_settings(st.secrets)
except ConfigError as e:
    st.error(f"🚨 {e}")
    st.stop()

configure_logging(settings.log_level)


# Settings is not hashed; cache_key carries the values that invalidate the client
@st.cache_resource
def get_gateway(_settings, cache_key):
    return ModelGateway.from_settings(_settings)


gateway = get_gateway(settings, settings.cache_key)

# ===============================
# SESSION STATE BOOTSTRAP
# ===============================

if "app_state" not in st.session_state:
    st.session_state.app_state = AppState()

state: AppState = st.session_state.app_state

PAGES = [
    "🏠 Home", "📔 Journal", "🎙️ Voice Log", "📷 Mood Scan",
    "📊 Mood Tracker", "🧘 Recommendations", "💬 Support Chat", "🛡️ Safety",
]
HOME, JOURNAL, VOICE, SCAN, TRACKER, RECS, CHAT, SAFETY = PAGES


def go_to(page):
    st.session_state["_nav_to"] = page


# A pending navigation must land before the radio widget is created
if "_nav_to" in st.session_state:
    st.session_state.page = st.session_state.pop("_nav_to")


def log_reading(reading, source):
    entry = state.add_mood_entry(reading, source)
    logger.info("Logged %s mood from %s", entry.mood.value, entry.source.value)
    st.session_state.pop("_recommendations", None)
    go_to(HOME)
    st.rerun()


def show_trend(entries):
    series = trend_series(entries)
    if not series.is_sufficient:
        st.info("Not enough data to draw a trend line.")
        return
    fig = trend_figure(series)
    st.pyplot(fig)
    plt.close(fig)

# ===============================
# SIDEBAR
# ===============================

with st.sidebar:
    st.title(f"🧠 Hi, {state.user_name}!")
    state.user_name = st.text_input("Your name", value=state.user_name) or state.user_name
    st.markdown("---")
    page = st.radio("Navigate", PAGES, key="page")
    st.markdown("---")
    st.caption("⚠️ MindWell is not a replacement for licensed mental health care. "
               "In a crisis, contact your local emergency services.")

# ===============================
# HOME PAGE
# ===============================

if page == HOME:
    st.title(f"Hi, {state.user_name}!")
    st.markdown("How are you feeling today?")

    if state.high_distress_alert:
        st.markdown(
            '<div class="alert-box">🛡️ <strong>High Distress Detected</strong><br>'
            "We've noticed you might be struggling. Help is available.</div>",
            unsafe_allow_html=True)
        st.button("View Safety Options", on_click=go_to, args=(SAFETY,), type="primary")

    st.subheader("Mood Summary")
    latest = state.latest_entry
    if latest:
        st.markdown(f"### {latest.emoji} Feeling {latest.mood.value}")
    else:
        st.caption("No moods logged yet.")

    show_trend(state.mood_history[-10:])

    st.subheader("Recent Entries")
    recent = recent_entries(state.mood_history, 5)
    if not recent:
        st.info("Log your mood to see your history here!")
    for entry in recent:
        st.markdown(entry_card(entry), unsafe_allow_html=True)

    st.markdown("---")
    st.button("🫁 Try deep breathing now »", on_click=go_to, args=(RECS,), use_container_width=True)


# ===============================
# JOURNAL PAGE
# ===============================

elif page == JOURNAL:
    st.title("📔 Journal")
    entry_text = st.text_area("How are you feeling today?", height=250,
                              placeholder="Write about your day, your feelings, anything on your mind...")

    if st.button("Submit", type="primary", disabled=not entry_text.strip()):
        with st.spinner("Analyzing..."):
            reading = classify_from_text(gateway, entry_text)
        log_reading(reading, MoodSource.JOURNAL)


# ===============================
# VOICE LOG PAGE
# ===============================

elif page == VOICE:
    st.title("🎙️ Voice Log")
    recording = st.audio_input("Tap to start recording")

    if recording is not None:
        audio_bytes = recording.getvalue()
        cache_key = hash(audio_bytes)
        if st.session_state.get("_transcript_key") != cache_key:
            with st.spinner("Transcribing..."):
                st.session_state["_transcript"] = transcribe_audio(gateway, audio_bytes, recording.name or "voice-log.wav")
            st.session_state["_transcript_key"] = cache_key
        if st.session_state.get("_transcript") is None:
            st.error("Could not transcribe the recording. Please try again.")

    transcript = st.session_state.get("_transcript") or ""
    st.text_area("Transcript", value=transcript or "Your transcribed text will appear here.",
                 disabled=True, height=120)

    if st.button("Analyze Mood", type="primary", disabled=not transcript.strip()):
        with st.spinner("Analyzing..."):
            reading = classify_from_text(gateway, transcript)
        st.session_state.pop("_transcript", None)
        st.session_state.pop("_transcript_key", None)
        log_reading(reading, MoodSource.VOICE)


# ===============================
# MOOD SCAN PAGE
# ===============================

elif page == SCAN:
    st.title("📷 Mood Scan")
    mode = st.radio("Image source", ["Use Camera", "Upload Photo"], horizontal=True)
    if mode == "Use Camera":
        image = st.camera_input("Look at the camera")
    else:
        image = st.file_uploader("Upload a photo", type=["jpg", "jpeg", "png"])

    if image is not None and mode == "Upload Photo":
        st.image(image)

    if st.button("Capture & Analyze", type="primary", disabled=image is None):
        with st.spinner("Analyzing..."):
            reading = classify_from_image(gateway, image.getvalue(), image.type or "image/jpeg")
        st.markdown(f"## {reading.emoji} {reading.mood.value}")
        state.add_mood_entry(reading, MoodSource.FACIAL)
        st.session_state.pop("_recommendations", None)
        st.button("Back to Home", on_click=go_to, args=(HOME,))


# ===============================
# MOOD TRACKER PAGE
# ===============================

elif page == TRACKER:
    st.title("📊 Mood Tracker")
    history = state.mood_history

    if not history:
        st.info("No mood data yet. Log your mood to start tracking your stats!")
    else:
        for summary in summarize_windows(history):
            st.subheader(summary.title)
            if not summary.entries:
                st.caption("No mood data for this period.")
                st.markdown("---")
                continue

            st.markdown("**Emotion Breakdown**")
            for stat in summary.distribution:
                st.markdown(f"{stat.emoji} {stat.mood.value} — {stat.percentage}%")
                st.progress(stat.percentage / 100)
            fig = distribution_figure(summary.distribution)
            st.pyplot(fig)
            plt.close(fig)

            st.markdown("**Mood Trend**")
            show_trend(summary.entries)
            st.markdown("---")


# ===============================
# RECOMMENDATIONS PAGE
# ===============================

elif page == RECS:
    st.title("🧘 Recommendation Center")

    c1, c2 = st.columns([4, 1])
    with c2:
        if st.button("🔄 Refresh"):
            st.session_state.pop("_recommendations", None)

    if "_recommendations" not in st.session_state:
        with st.spinner("Finding ideas for you..."):
            st.session_state["_recommendations"] = get_recommendations(gateway, state.mood_history)
    recs = st.session_state["_recommendations"]

    st.markdown(for_mood_banner(recs), unsafe_allow_html=True)

    st.subheader("🫁 Breathing Exercises")
    for item in recs.breathing:
        st.markdown(text_card(item), unsafe_allow_html=True)

    st.subheader("📔 Journaling Prompts")
    for item in recs.journaling:
        st.markdown(text_card(item, "✍️ "), unsafe_allow_html=True)

    st.subheader("🎵 Music Recommendations")
    for playlist in recs.music:
        st.link_button(f"{playlist.title} — {playlist.description}", spotify_search_url(playlist),
                       use_container_width=True)

    st.subheader(f"▶️ {video_section_title(recs)}")
    cols = st.columns(2)
    for col, video in zip(cols, recs.videos):
        with col:
            st.link_button(video.title, youtube_search_url(video), use_container_width=True)


# ===============================
# SUPPORT CHAT PAGE
# ===============================

elif page == CHAT:
    st.title("💬 Support Chat")
    session = state.start_chat(gateway)

    initial_input = None
    if session.show_quick_picks():
        cols = st.columns(len(QUICK_PICKS))
        for i, p in enumerate(QUICK_PICKS):
            with cols[i]:
                if st.button(p, key=f"quick_{i}", use_container_width=True):
                    initial_input = p

    for message in session.messages:
        with st.chat_message("user" if message.sender == Sender.USER else "assistant"):
            st.write(message.text)

    user_input = st.chat_input("Type your message...") or initial_input

    if user_input:
        with st.chat_message("user"):
            st.write(user_input)
        with st.chat_message("assistant"):
            with st.spinner("Thinking..."):
                reply = session.send(user_input)
            if reply:
                st.write(reply.text)
        st.rerun()


# ===============================
# SAFETY PAGE
# ===============================

elif page == SAFETY:
    st.title("🛡️ Safety & Support")
    st.warning("We noticed you might be feeling distressed. Please know that support is available, "
               "and you are not alone.")

    st.subheader("Speak with a Counselor")
    st.markdown("The 988 Suicide & Crisis Lifeline is a free, confidential service available 24/7.")
    st.link_button("📞 Call 988 Now", "tel:988", type="primary", use_container_width=True)

    st.subheader("Emergency Contacts")
    c1, c2 = st.columns([3, 1])
    with c1:
        st.markdown("Family Member")
        st.markdown("Close Friend")
    with c2:
        st.link_button("📞 Call", "tel:123-456-7890")
        st.link_button("📞 Call", "tel:098-765-4321")

    st.link_button("🚨 Call 911 for Immediate Emergency", "tel:911", use_container_width=True)

    st.markdown("---")

    def _dismiss():
        state.dismiss_distress()
        go_to(HOME)

    st.button("I'm okay for now, dismiss this.", on_click=_dismiss)

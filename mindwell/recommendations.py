import logging
from typing import Dict, Sequence
from urllib.parse import quote

from mindwell.ai_client import ModelGateway, ModelResult, StructuredRequest
from mindwell.models import Mood, MoodEntry, Playlist, Recommendations, Video, VideoType
from mindwell.schemas import RecommendationSchema

logger = logging.getLogger(__name__)

MEDITATION_MOODS = {Mood.SAD, Mood.ANXIOUS, Mood.ANGRY, Mood.TIRED}

# ===============================
# FALLBACK CONTENT
# ===============================

DEFAULT_BREATHING = [
    "Take 5 deep breaths.",
    "Try box breathing: inhale 4s, hold 4s, exhale 4s, hold 4s.",
    "Focus on your breath for one minute.",
]
DEFAULT_JOURNALING = [
    "What is one thing you are grateful for today?",
    "Describe a small moment of joy you experienced.",
    "What is something you can let go of?",
]
DEFAULT_MUSIC = [
    Playlist("Acoustic Calm", "Gentle instrumental guitar to soothe your mind."),
    Playlist("Lofi Beats", "Relaxing hip hop beats for focus and chill."),
]
DEFAULT_VIDEOS = [
    Video("5-Minute Guided Meditation for Beginners", VideoType.MEDITATION),
    Video("Peaceful Forest Stream Sounds", VideoType.MEDITATION),
]

_UPBEAT = {
    "journaling": [
        "What are three things that contributed to this feeling?",
        "How can you share this positive energy with others?",
        "Describe this feeling in as much detail as possible.",
    ],
    "music": [
        Playlist("Good Vibes Only", "Upbeat pop and indie tracks to keep the energy high."),
        Playlist("Dance Party USA", "Non-stop hits that make you want to move."),
    ],
    "videos": [
        Video("Try Not to Laugh Challenge", VideoType.FUNNY),
        Video("Cute Animals Compilation", VideoType.FUNNY),
    ],
}

# Breathing is never overridden; it stays on the generic list for every mood.
MOOD_FALLBACKS: Dict[Mood, dict] = {
    Mood.SAD: {
        "journaling": [
            "What's one small thing that could bring you comfort right now?",
            "Write a letter to your sadness, what would you say?",
            "Recall a memory that once made you happy.",
        ],
        "music": [
            Playlist("Hopeful Ambient", "Gentle soundscapes to lift your spirits."),
            Playlist("Comforting Classics", "Familiar, soothing classical pieces."),
        ],
        "videos": [
            Video("10-Min Meditation for Sadness", VideoType.MEDITATION),
            Video("Guided Visualization: Your Safe Place", VideoType.MEDITATION),
        ],
    },
    Mood.ANXIOUS: {
        "journaling": [
            "What is within my control right now?",
            "List 5 things you can see, 4 you can touch, 3 you can hear.",
            "Write down your worries and then physically close the book on them.",
        ],
        "music": [
            Playlist("Binaural Beats for Anxiety", "Frequencies designed to calm the mind."),
            Playlist("Nature Sounds: Rain on a Window", "The soothing sound of gentle rain."),
        ],
        "videos": [
            Video("Body Scan Meditation for Anxiety", VideoType.MEDITATION),
            Video("Guided Breathing for Panic Attacks", VideoType.MEDITATION),
        ],
    },
    Mood.ANGRY: {
        "journaling": [
            "What is the root cause of this anger?",
            "Write down everything you want to scream, then tear up the paper.",
            "What is a productive action I can take with this energy?",
        ],
        "music": [
            Playlist("Power Rock Anthems", "High-energy tracks to release tension."),
            Playlist("Intense Classical", "Dramatic orchestral pieces to match your intensity."),
        ],
        "videos": [
            Video("Walking Meditation to Release Anger", VideoType.MEDITATION),
            Video("Try This When You Feel Angry (Guided Practice)", VideoType.MEDITATION),
        ],
    },
    Mood.HAPPY: _UPBEAT,
    Mood.EXCITED: _UPBEAT,
}

RECOMMENDATION_PROMPT = """You are a caring and empathetic mental wellness assistant. The user's most recent mood is '{mood}'.
Based on this mood, provide supportive recommendations in JSON format.
- Suggest 3 simple, calming breathing exercises.
- Suggest 3 gentle journaling prompts relevant to the mood.
- Suggest 2 music playlists. For each, provide a catchy title and a short, one-sentence description, like a Spotify playlist.
- Suggest 2 {video_type} video ideas. For each, provide a short, clickable title, like a YouTube video."""


def default_recommendations(mood: Mood = Mood.NEUTRAL) -> Recommendations:
    return Recommendations(
        for_mood=mood,
        breathing=list(DEFAULT_BREATHING),
        journaling=list(DEFAULT_JOURNALING),
        music=list(DEFAULT_MUSIC),
        videos=list(DEFAULT_VIDEOS),
    )


def fallback_recommendations(mood: Mood) -> Recommendations:
    """Generic bundle stamped with the mood, then the mood-specific overrides."""
    recs = default_recommendations(mood)
    overrides = MOOD_FALLBACKS.get(mood)
    if overrides:
        recs.journaling = list(overrides["journaling"])
        recs.music = list(overrides["music"])
        recs.videos = list(overrides["videos"])
    return recs


def video_type_for(mood: Mood) -> VideoType:
    return VideoType.MEDITATION if mood in MEDITATION_MOODS else VideoType.FUNNY


# ===============================
# REMOTE
# ===============================

def request_recommendations(gateway: ModelGateway, mood: Mood) -> ModelResult:
    video_type = video_type_for(mood)
    result = gateway.generate(StructuredRequest(
        prompt=RECOMMENDATION_PROMPT.format(mood=mood.value, video_type=video_type.value),
        schema=RecommendationSchema,
    ))
    if not result.ok:
        return result
    parsed = result.value
    # The mood is stamped by us, never echoed back by the model
    return ModelResult.success(Recommendations(
        for_mood=mood,
        breathing=list(parsed.breathing),
        journaling=list(parsed.journaling),
        music=[Playlist(p.title, p.description) for p in parsed.music],
        videos=[Video(v.title, v.type) for v in parsed.videos],
    ))


def get_recommendations(gateway: ModelGateway, mood_history: Sequence[MoodEntry]) -> Recommendations:
    """Recommendations for the most recent mood. Never raises."""
    if not mood_history:
        logger.info("No mood history, returning default recommendations")
        return default_recommendations()

    latest_mood = mood_history[-1].mood
    result = request_recommendations(gateway, latest_mood)
    if result.ok:
        return result.value
    logger.info("Using fallback recommendations for %s (%s)", latest_mood.value, result.failure.value)
    return fallback_recommendations(latest_mood)


# ===============================
# LINK-OUTS
# ===============================

def spotify_search_url(playlist: Playlist) -> str:
    return f"https://open.spotify.com/search/{quote(playlist.title, safe='')}"


def youtube_search_url(video: Video) -> str:
    return f"https://www.youtube.com/results?search_query={quote(video.title, safe='')}"


def video_section_title(recs: Recommendations) -> str:
    if recs.videos and recs.videos[0].type == VideoType.FUNNY:
        return "Funny Videos"
    return "Meditation Videos"

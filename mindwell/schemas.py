"""Pydantic models for the structured responses we ask the model for.

Each schema doubles as the request's schema descriptor: its JSON schema is
embedded in the prompt, and the raw reply is validated against it.
"""

from typing import List

from pydantic import BaseModel, Field

from mindwell.models import Mood, VideoType


class TextMoodSchema(BaseModel):
    emoji: str = Field(min_length=1, description="A single emoji representing the mood.")
    mood: Mood = Field(description="A one-word mood descriptor.")
    notes: str = Field(description="A brief, gentle, one-sentence summary of the entry's feeling.")


class ImageMoodSchema(BaseModel):
    emoji: str = Field(description="A single emoji representing the dominant mood.")
    mood: Mood = Field(description="A one-word mood descriptor.")


class PlaylistSchema(BaseModel):
    title: str = Field(description="Catchy title for a music playlist.")
    description: str = Field(description="A short, one-sentence description for the playlist.")


class VideoSchema(BaseModel):
    title: str = Field(description="A short, clickable title for a video.")
    type: VideoType = Field(description="The type of video.")


class RecommendationSchema(BaseModel):
    breathing: List[str] = Field(
        min_length=3, max_length=3,
        description="List of 3 short, actionable breathing exercises.")
    journaling: List[str] = Field(
        min_length=3, max_length=3,
        description="List of 3 insightful journaling prompts tailored to the mood.")
    music: List[PlaylistSchema] = Field(
        min_length=2, max_length=2,
        description="List of 2 music playlist recommendations.")
    videos: List[VideoSchema] = Field(
        min_length=2, max_length=2,
        description="List of 2 video recommendations.")

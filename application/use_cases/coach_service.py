"""
CoachService Use Case.

Prompts the content generator for coaching copy and guarantees an answer:
when no generator is configured, when it raises (rate limits, quota,
network), or when it returns nothing, a static fallback text is returned
instead. Nothing here raises because of the model.
"""

import logging
import zlib
from dataclasses import dataclass
from typing import List, Optional, Sequence

from application.ports import ContentGenerator
from domain.models import BMICategory, UserProfile, WorkoutLocation
from domain.services.bmi import bmi_category, calculate_bmi

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are FitGuide Assistant, a friendly fitness coach for beginners. "
    "Provide simple, safe, and effective advice on gym machines, home workouts, "
    "and basic nutrition. Always encourage proper form."
)

GENERAL_INSIGHTS = [
    "Great job! Keep staying active and focused on your goals. Consistency is key!",
    "Remember, progress takes time. Focus on form over intensity!",
    "You're making great progress. Stay hydrated and get enough rest!",
    "Every workout counts! Keep pushing yourself within your limits.",
    "Listen to your body and celebrate small wins along the way!",
]

CATEGORY_INSIGHTS = {
    BMICategory.UNDERWEIGHT: "Focus on strength training and eating enough to build muscle mass!",
    BMICategory.OVERWEIGHT: "Combine cardio with strength training for optimal weight loss results!",
}

HOME_ROUTINE = """🏠 **Home Workout Routine**

1. **Push-ups** - 3 sets of 10-15 reps
   Coach Tip: Keep your body in a straight line, don't let your hips sag!

2. **Bodyweight Squats** - 3 sets of 15 reps
   Coach Tip: Go as low as comfortable, keep your weight on your heels.

3. **Plank Hold** - 3 sets of 30-60 seconds
   Coach Tip: Engage your core, don't let your hips drop!

4. **Mountain Climbers** - 3 sets of 20 reps
   Coach Tip: Keep your core tight and drive your knees to your chest.

5. **Burpees** - 3 sets of 8-10 reps
   Coach Tip: Focus on proper form over speed. You've got this! 💪

**Motivation:** Every rep brings you closer to your goals. Stay consistent!"""

GYM_ROUTINE = """💪 **Gym Workout Routine**

1. **Lat Pulldowns** - 3 sets of 10-12 reps
   Coach Tip: Focus on squeezing your lats, don't just use your arms.

2. **Seated Rows** - 3 sets of 12 reps
   Coach Tip: Keep your chest up and pull to your waistline.

3. **Bench Press** - 3 sets of 8-10 reps
   Coach Tip: Keep your feet planted and control the bar down.

4. **Leg Press** - 3 sets of 12-15 reps
   Coach Tip: Don't go too deep, keep your glutes on the seat.

5. **Shoulder Press** - 3 sets of 10 reps
   Coach Tip: Start with lighter weight to master the form.

**Motivation:** Great choice using the gym! Make every rep count! 🏋️"""

MEAL_PLAN_FALLBACK = (
    "Focus on whole foods, lean proteins, and plenty of greens. "
    "Try to eat every 3-4 hours to keep your energy stable!"
)
CHAT_NOT_CONFIGURED = (
    "I'm sorry, I can't chat right now as the AI service is not configured. "
    "Please check back later!"
)
CHAT_UNAVAILABLE = (
    "I'm sorry, I'm having trouble connecting right now. Let's focus on your workout plan!"
)
SCAN_FALLBACK = "Failed to analyze image. Please try again."

SCAN_PROMPT = (
    "Identify the gym equipment in this photo. Give its name, the muscles it "
    "works, and 3 short beginner tips for using it safely."
)


@dataclass
class ChatMessage:
    role: str  # "user" or "model"
    message: str


def default_insight(profile: UserProfile, category: BMICategory) -> str:
    """
    Static insight for when the model is unavailable.

    The general tip is chosen from the profile's name so the same user sees
    the same tip on every call.
    """
    if category in CATEGORY_INSIGHTS:
        return CATEGORY_INSIGHTS[category]
    seed = zlib.crc32(f"{profile.first_name} {profile.last_name}".encode("utf-8"))
    return GENERAL_INSIGHTS[seed % len(GENERAL_INSIGHTS)]


def default_routine(profile: UserProfile) -> str:
    return HOME_ROUTINE if profile.location is WorkoutLocation.HOME else GYM_ROUTINE


class CoachService:
    """
    AI coaching with guaranteed fallbacks.

    Usage:
        >>> coach = CoachService(generator)   # or CoachService(None)
        >>> coach.fitness_insight(profile)
    """

    def __init__(self, generator: Optional[ContentGenerator] = None) -> None:
        self._generator = generator

    @property
    def is_configured(self) -> bool:
        return self._generator is not None

    def _generate(self, feature: str, prompt: str, temperature: float) -> Optional[str]:
        if self._generator is None:
            logger.warning(f"No content generator configured for {feature}")
            return None
        try:
            text = self._generator.generate(prompt, temperature=temperature)
        except Exception as e:
            logger.error(f"{feature} generation failed: {e}")
            return None
        return text.strip() if text and text.strip() else None

    def fitness_insight(self, profile: UserProfile) -> str:
        score = calculate_bmi(profile.height, profile.weight)
        category = bmi_category(score)
        prompt = (
            f"Generate a short, encouraging fitness insight for a {_describe(profile)} "
            f"aiming for {_goal(profile)}.\n"
            f"BMI is {score:.1f} ({category.value}).\n"
            f"Workout Location: {profile.location.value}.\n"
            "Limit to 2-3 sentences."
        )
        return self._generate("insight", prompt, 0.7) or default_insight(profile, category)

    def workout_routine(self, profile: UserProfile) -> str:
        category = bmi_category(calculate_bmi(profile.height, profile.weight))
        if profile.location is WorkoutLocation.GYM:
            equipment_text = f"Available Equipment: {', '.join(profile.available_equipment)}"
        else:
            equipment_text = "Location: Home (No heavy equipment)"

        prompt = (
            "As a world-class personal trainer, generate a custom daily workout "
            "routine for a beginner.\n"
            f"User Profile: {_describe(profile)}, Goal: {_goal(profile)}, "
            f"BMI Status: {category.value}.\n"
            f"{equipment_text}.\n\n"
            "Requirements:\n"
            "1. Provide 5-6 exercises.\n"
            '2. For each, include Name, Sets, Reps, and a "Coach Tip" on form.\n'
            "3. Format it clearly with emojis.\n"
            "4. Ensure it fits their equipment. If they are at home, use bodyweight only.\n"
            "5. Add a 1-sentence motivation at the end."
        )
        return self._generate("routine", prompt, 0.8) or default_routine(profile)

    def meal_plan(self, profile: UserProfile) -> str:
        prompt = (
            "As a professional nutritionist, generate a 1-day sample meal plan for a "
            f"{_describe(profile)} who wants to {_goal(profile)}.\n"
            f"Height: {profile.height:g}cm, Weight: {profile.weight:g}kg.\n"
            "Format the response with headers for Breakfast, Lunch, Snack, and Dinner. "
            "Keep it concise and beginner-friendly."
        )
        return self._generate("meal plan", prompt, 0.7) or MEAL_PLAN_FALLBACK

    def chat(self, history: Sequence[ChatMessage]) -> str:
        """Answer the last user message in `history`."""
        if self._generator is None:
            return CHAT_NOT_CONFIGURED
        if not history:
            return CHAT_UNAVAILABLE

        lines: List[str] = [SYSTEM_INSTRUCTION, ""]
        for turn in history:
            speaker = "User" if turn.role == "user" else "FitGuide"
            lines.append(f"{speaker}: {turn.message}")
        lines.append("FitGuide:")

        return self._generate("chat", "\n".join(lines), 0.7) or CHAT_UNAVAILABLE

    def identify_equipment(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> str:
        if self._generator is None or not image_bytes:
            return SCAN_FALLBACK
        try:
            text = self._generator.analyze_image(image_bytes, mime_type, SCAN_PROMPT)
        except Exception as e:
            logger.error(f"Equipment scan failed: {e}")
            return SCAN_FALLBACK
        return text.strip() if text and text.strip() else SCAN_FALLBACK


def _describe(profile: UserProfile) -> str:
    age = f"{profile.age} year old" if profile.age else "adult"
    gender = profile.gender.value if profile.gender else "person"
    return f"{age} {gender}"


def _goal(profile: UserProfile) -> str:
    return profile.goal.value if profile.goal else "general fitness"

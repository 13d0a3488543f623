"""Tasks seeded into an empty registry"""
from typing import Any, Dict, List

DEFAULT_TASKS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "title": "GATE Exam Preparation",
        "description": "Study computer science topics for GATE exam",
        "emoji": "📚",
        "time_slots": 3,
        "category": "study",
        "color": "#3B82F6",
    },
    {
        "id": "2",
        "title": "Yoga & Meditation",
        "description": "30 minutes of yoga and mindfulness practice",
        "emoji": "🧘‍♀️",
        "time_slots": 1,
        "category": "health",
        "color": "#10B981",
    },
    {
        "id": "3",
        "title": "Coding Practice",
        "description": "Solve programming problems and work on projects",
        "emoji": "💻",
        "time_slots": 2,
        "category": "work",
        "color": "#8B5CF6",
    },
    {
        "id": "4",
        "title": "Reading Tech Articles",
        "description": "Stay updated with latest technology trends",
        "emoji": "📖",
        "time_slots": 1,
        "category": "study",
        "color": "#F59E0B",
    },
]

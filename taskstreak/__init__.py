"""TaskStreak: daily task tracking with streaks and completion statistics"""

__version__ = "1.0.0"

"""Configuration constants for the stop game."""

import string

# Categories in display order: (key, display name)
CATEGORIES = [
    ('name', 'Name'),
    ('place', 'Place'),
    ('country', 'Country'),
    ('animal', 'Animal'),
    ('object', 'Object'),
    ('color', 'Color'),
    ('element', 'Element'),
    ('profession', 'Profession'),
    ('media', 'Movie/Series/Book'),
    ('brand', 'Brand'),
    ('plant', 'Plant'),
    ('verb', 'Verb'),
    ('adjective', 'Adjective'),
    ('emotion', 'Emotion'),
    ('continent', 'Continent'),
    ('fruit', 'Fruit'),
]

# Letter drawing
ALPHABET = string.ascii_uppercase
EXCLUDED_LETTERS = 'KWXY'     # Too few words start with these

# Round timer
TIME_LIMITS = (60, 90, 120)   # Selectable round lengths in seconds
DEFAULT_TIME_LIMIT = 90
GENERATION_GRACE_SECONDS = 2  # Extra wait for opponent answers after the timer ends

# Scoring
UNIQUE_POINTS = 10            # Valid answer nobody else gave
DUPLICATE_POINTS = 5          # Valid answer both sides gave
MAX_ANSWER_WORDS = 4          # Longer answers are treated as noise
MIN_ANSWER_LETTERS = 2

# Opponent experience
XP_VALID_ANSWER = 10
XP_INVALID_ANSWER = 2         # Attempted but rejected
XP_PER_LEVEL = 100

# Opponent answer distribution
BASE_ANSWER_CHANCE = 0.55     # Chance to fill a category at level 1
ANSWER_CHANCE_PER_LEVEL = 0.05
MAX_ANSWER_CHANCE = 0.95
RARE_WORD_LEVEL = 3           # From this level on, the whole word list is used
COMMON_WORD_COUNT = 3         # Words per letter considered common

# History and rankings
HISTORY_LIMIT = 10

# Config file for secrets (gemini_api_key)
CONFIG_FILE = '~/.config/stopgame/config.json'

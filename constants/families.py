"""
Family Seed Data

Initial families and host rotation written to the database the first
time the application starts.
"""

FAMILIES = [
    {'id': 'f1', 'name': 'Imran & Rachana', 'emoji': '🌙', 'color': '#c17f5e'},
    {'id': 'f2', 'name': 'Rahul & Leena', 'emoji': '🌸', 'color': '#7a9e7e'},
    {'id': 'f3', 'name': 'Iqbal & Zarpheen', 'emoji': '⭐', 'color': '#8b6f9e'},
]

# Host order; may differ from the display order of FAMILIES
HOST_ROTATION = ['f1', 'f2', 'f3']

# No family has hosted yet
INITIAL_LAST_HOST_INDEX = -1

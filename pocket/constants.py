"""
Constants for the Prompt Pocket store.

Note: The display defaults here are fallback values.
Actual values are loaded from the stored config at runtime via ConfigFile.
"""
from pathlib import Path

# =============================================================================
# Storage keys
# =============================================================================

STORAGE_KEY = "prompt-pocket-data"
INITIALIZED_KEY = "prompt-pocket-initialized"
CONFIG_KEY = "config"

# =============================================================================
# Locations
# =============================================================================

DATA_DIR_ENV_VAR = "PROMPT_POCKET_HOME"
DEFAULT_DATA_DIR = Path.home() / ".prompt-pocket"

# =============================================================================
# Default Fallback Values
# =============================================================================

DEFAULT_SHOW_COPY_NOTIFICATION = True
DEFAULT_CONFIRM_DELETE = True
DEFAULT_PREVIEW_LENGTH = 100

COPY_SUFFIX = " (Copy)"

# Deepest allowed group nesting; a root group is at depth 1
MAX_GROUP_DEPTH = 64

# Import strategies
IMPORT_REPLACE = "replace"
IMPORT_MERGE = "merge"
IMPORT_STRATEGIES = [IMPORT_MERGE, IMPORT_REPLACE]

# =============================================================================
# First-run sample data
# =============================================================================

SAMPLE_DATA = {
    "groups": [
        {
            "id": "sample-feature-alpha",
            "name": "Feature Alpha",
            "color": "blue",
            "children": [],
            "prompts": [
                {
                    "id": "sample-feature-alpha-1",
                    "title": "Implement Feature",
                    "content": (
                        "Help me implement [feature description].\n\n"
                        "Context:\n- [Current state]\n- [Requirements]\n- [Constraints]"
                    ),
                }
            ],
        },
        {
            "id": "sample-agents",
            "name": "Agents",
            "color": "purple",
            "children": [],
            "prompts": [
                {
                    "id": "sample-agents-1",
                    "title": "Agent System Prompt",
                    "content": (
                        "You are an AI assistant specialized in [domain].\n\n"
                        "Your capabilities:\n- [Capability 1]\n- [Capability 2]\n\n"
                        "Guidelines:\n- [Guideline 1]\n- [Guideline 2]"
                    ),
                }
            ],
        },
        {
            "id": "sample-shell-cmds",
            "name": "Shell Cmds",
            "color": "green",
            "children": [],
            "prompts": [
                {
                    "id": "sample-shell-cmds-1",
                    "title": "Git Workflow",
                    "content": (
                        "Common git commands:\n\n```bash\ngit status\ngit add .\n"
                        'git commit -m "message"\ngit push origin main\n```'
                    ),
                }
            ],
        },
        {
            "id": "sample-misc",
            "name": "Misc",
            "color": "orange",
            "children": [],
            "prompts": [
                {
                    "id": "sample-misc-1",
                    "title": "Explain Code",
                    "content": (
                        "Please explain the following code:\n\n```\n[Paste code here]\n```\n\n"
                        "Include:\n- What it does\n- How it works\n- Any potential improvements"
                    ),
                }
            ],
        },
    ]
}

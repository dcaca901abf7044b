"""
Prompt Pocket: a personal store of reusable prompts organized in nested groups.
"""

__version__ = "0.1.0"

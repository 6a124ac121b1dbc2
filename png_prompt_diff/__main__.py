"""
Entry point for running png_prompt_diff as a module.
Usage: python -m png_prompt_diff IMAGE [IMAGE ...]
"""
from .cli import run

if __name__ == "__main__":
    run()

"""Interface adapters over the plugin runtime.

Module split:
    - `cli`: interactive terminal host running the image action per input line.
"""

"""
Rubik's Cube Game — Python + Pygame + PyOpenGL

Usage:
    python rubik-cube.py [size]      # size 2..7, default 3

Dependencies (see pyproject.toml):
    pip install -e .
"""
from rubik_cube.app import main

if __name__ == '__main__':
    main()

"""
Rubik's Cube front-end: Pygame + PyOpenGL
-----------------------------------------
Renders a CubeEngine and feeds it input:
  • 3D rendering of an N×N×N cube (2 to 7) with smooth eased layer turns
  • Drag on a piece to turn its layer, drag elsewhere to orbit, wheel to zoom
  • Keyboard face turns (U, D, L, R, F, B) incl. prime via Shift
  • Scramble (S), Reset (C), Undo (Z), Size (+/-)
  • Timer that starts on the first move, shown in the window title
"""
from __future__ import annotations

import logging
import math
import sys
import tkinter as tk
from tkinter import messagebox
from typing import Dict, Optional, Tuple

import numpy as np
import pygame
from pygame.locals import *  # noqa: F401,F403
from OpenGL.GL import *  # noqa: F401,F403
from OpenGL.GLU import *  # noqa: F401,F403

from .config import (BASE_COLOR, COLORS, FPS, MAX_CAM_DIST, MAX_PITCH, MIN_CAM_DIST, MIN_PITCH, MOUSE_SENS,
                     PIECE_SIZE, PIECE_SPACING, WINDOW_H, WINDOW_W, ZOOM_SENS, sanitize_numeric_input)
from .engine import CubeEngine
from .gesture import Hit
from .piece import AXIS_VECTORS, Piece
from .picking import pick

logger = logging.getLogger(__name__)

CONTROLS_TEXT = """
RUBIK'S CUBE CONTROLS
=====================

CUBE MOVES:
• R L U D F B    - Face turns (letter keys)
• Arrow Keys     - U/D/L/R face turns
• Shift + (key)  - Counterclockwise turn
• Drag a piece   - Turn the layer under the pointer

SHORTCUTS:
• S              - Scramble cube
• C              - Reset to solved
• Z              - Undo last move
• + / -          - Bigger / smaller cube
• ESC or Q       - Quit

MOUSE:
• Drag outside   - Orbit camera
• Wheel          - Zoom
"""

KEY_TO_FACE = {
    K_u: 'U', K_d: 'D', K_l: 'L', K_r: 'R', K_f: 'F', K_b: 'B',
    K_UP: 'U', K_DOWN: 'D', K_LEFT: 'L', K_RIGHT: 'R',
}

# Local faces of a piece: letter -> (normal, quad corners as unit-cube signs)
FACE_QUADS = {
    'U': ((0.0, 1.0, 0.0), [(-1, 1, -1), (-1, 1, 1), (1, 1, 1), (1, 1, -1)]),
    'D': ((0.0, -1.0, 0.0), [(-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1)]),
    'F': ((0.0, 0.0, 1.0), [(-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)]),
    'B': ((0.0, 0.0, -1.0), [(-1, -1, -1), (-1, 1, -1), (1, 1, -1), (1, -1, -1)]),
    'R': ((1.0, 0.0, 0.0), [(1, -1, -1), (1, 1, -1), (1, 1, 1), (1, -1, 1)]),
    'L': ((-1.0, 0.0, 0.0), [(-1, -1, -1), (-1, -1, 1), (-1, 1, 1), (-1, 1, -1)]),
}


def show_controls_dialog() -> None:
    root = tk.Tk()
    root.withdraw()
    try:
        messagebox.showinfo("Controls", CONTROLS_TEXT)
    finally:
        root.destroy()


def _set_material(rgb: Tuple[float, float, float], sticker: bool) -> None:
    r, g, b = rgb
    glMaterialfv(GL_FRONT, GL_DIFFUSE, (GLfloat * 4)(r, g, b, 1.0))
    glMaterialfv(GL_FRONT, GL_AMBIENT, (GLfloat * 4)(r * 0.3, g * 0.3, b * 0.3, 1.0))
    specular = 0.3 if sticker else 0.05
    glMaterialfv(GL_FRONT, GL_SPECULAR, (GLfloat * 4)(specular, specular, specular, 1.0))
    glMaterialfv(GL_FRONT, GL_SHININESS, (GLfloat * 1)(20.0))


def draw_piece(piece: Piece, half_extent: float) -> None:
    """Draw one piece at its logical pose; stickers are the faces it had on a solved cube."""
    stickers = piece.stickers(half_extent)
    half = PIECE_SIZE / 2.0

    glPushMatrix()
    glMultMatrixf(np.ascontiguousarray(piece.world_matrix(PIECE_SPACING).T, dtype=np.float32))
    for face, (normal, corners) in FACE_QUADS.items():
        if face in stickers:
            _set_material(COLORS[face], True)
        else:
            _set_material(BASE_COLOR, False)
        glBegin(GL_QUADS)
        glNormal3f(*normal)
        for sx, sy, sz in corners:
            glVertex3f(sx * half, sy * half, sz * half)
        glEnd()
    glPopMatrix()


class App:
    def __init__(self, size: int = 3) -> None:
        pygame.init()
        pygame.display.set_mode((WINDOW_W, WINDOW_H), DOUBLEBUF | OPENGL)
        pygame.display.set_caption("Rubik's Cube — Press H for Help")
        self.clock = pygame.time.Clock()
        self.engine = CubeEngine(size, on_solved=self._on_solved, on_move_recorded=self._on_move_recorded)

        self.cam_dist = sanitize_numeric_input(7.4 + 1.5 * (self.engine.size - 3), MIN_CAM_DIST, MAX_CAM_DIST, 7.4)
        self.cam_yaw = 45.0
        self.cam_pitch = 30.0
        self.mouse_down = False
        self.last_mouse: Optional[Tuple[int, int]] = None
        self.drag: Optional[Dict] = None

        self._modelview = None
        self._projection = None
        self._viewport = None

        self._setup_gl()
        print(CONTROLS_TEXT)

    def _setup_gl(self) -> None:
        glViewport(0, 0, WINDOW_W, WINDOW_H)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(45, WINDOW_W / float(WINDOW_H), 0.1, 100.0)
        glMatrixMode(GL_MODELVIEW)
        glEnable(GL_DEPTH_TEST)
        glEnable(GL_CULL_FACE)
        glCullFace(GL_BACK)
        glClearColor(0.08, 0.08, 0.1, 1.0)
        glEnable(GL_MULTISAMPLE)
        glEnable(GL_NORMALIZE)

        glEnable(GL_LIGHTING)
        glEnable(GL_LIGHT0)
        glLightfv(GL_LIGHT0, GL_AMBIENT, (GLfloat * 4)(0.3, 0.3, 0.3, 1.0))
        glLightfv(GL_LIGHT0, GL_DIFFUSE, (GLfloat * 4)(0.8, 0.8, 0.8, 1.0))
        glLightfv(GL_LIGHT0, GL_POSITION, (GLfloat * 4)(5.0, 8.0, 10.0, 1.0))
        glDisable(GL_COLOR_MATERIAL)

    # -------- Engine callbacks --------
    def _on_move_recorded(self, notation: str, move_count: int) -> None:
        logger.info("move %d: %s", move_count, notation)

    def _on_solved(self) -> None:
        secs = self.engine.elapsed_ms / 1000.0
        print(f"Solved in {self.engine.move_count} moves, {secs:.2f}s")

    # -------- Camera & projection --------
    def camera_position(self) -> np.ndarray:
        pitch = math.radians(self.cam_pitch)
        yaw = math.radians(self.cam_yaw)
        return np.array((
            self.cam_dist * math.cos(pitch) * math.cos(yaw),
            self.cam_dist * math.sin(pitch),
            self.cam_dist * math.cos(pitch) * math.sin(yaw),
        ))

    def _apply_camera(self) -> None:
        glLoadIdentity()
        x, y, z = self.camera_position()
        gluLookAt(x, y, z, 0, 0, 0, 0, 1, 0)
        self._modelview = glGetDoublev(GL_MODELVIEW_MATRIX)
        self._projection = glGetDoublev(GL_PROJECTION_MATRIX)
        self._viewport = glGetIntegerv(GL_VIEWPORT)

    def project(self, point: np.ndarray) -> Tuple[float, float]:
        """World point -> window pixels (origin top-left), for the gesture resolver."""
        wx, wy, _ = gluProject(float(point[0]), float(point[1]), float(point[2]),
                               self._modelview, self._projection, self._viewport)
        return wx, WINDOW_H - wy

    def _pointer_ray(self, pos: Tuple[int, int]) -> Tuple[np.ndarray, np.ndarray]:
        x, y = float(pos[0]), float(WINDOW_H - pos[1])
        near = np.array(gluUnProject(x, y, 0.0, self._modelview, self._projection, self._viewport))
        far = np.array(gluUnProject(x, y, 1.0, self._modelview, self._projection, self._viewport))
        return near, far - near

    def _pick(self, pos: Tuple[int, int]) -> Optional[Hit]:
        if self._modelview is None:
            return None
        origin, direction = self._pointer_ray(pos)
        return pick(self.engine.cube, origin, direction)

    # -------- Main loop --------
    def run(self) -> None:
        running = True
        try:
            while running:
                dt_ms = self.clock.tick(FPS)
                for event in pygame.event.get():
                    try:
                        if not self._handle_event(event):
                            running = False
                    except Exception:
                        logger.exception("error handling event %s", pygame.event.event_name(event.type))
                self._step(dt_ms)
        finally:
            pygame.quit()

    def _handle_event(self, event) -> bool:
        """Returns False when the app should quit."""
        if event.type == QUIT:
            return False
        if event.type == KEYDOWN:
            return self._handle_key(event)
        if event.type == MOUSEBUTTONDOWN:
            self._handle_mouse_button_down(event)
        elif event.type == MOUSEBUTTONUP:
            self._handle_mouse_button_up(event)
        elif event.type == MOUSEMOTION:
            self._handle_mouse_motion(event)
        return True

    def _step(self, dt_ms: float) -> None:
        """One frame: advance the engine, then draw. A failing stage is logged and the loop goes on."""
        try:
            self.engine.update(dt_ms)
        except Exception:
            logger.exception("error updating animations")
        try:
            self._render()
        except Exception:
            logger.exception("error rendering frame")

    def _handle_key(self, event) -> bool:
        """Returns False when the app should quit."""
        if event.key in (K_ESCAPE, K_q):
            return False
        if event.key == K_c:
            self.engine.reset()
        elif event.key == K_s:
            self.engine.scramble()
        elif event.key == K_z:
            self.engine.undo()
        elif event.key in (K_PLUS, K_EQUALS, K_KP_PLUS):
            self._resize(self.engine.size + 1)
        elif event.key in (K_MINUS, K_KP_MINUS):
            self._resize(self.engine.size - 1)
        elif event.key == K_h:
            show_controls_dialog()
        elif event.key in KEY_TO_FACE:
            prime = bool(pygame.key.get_mods() & KMOD_SHIFT)
            self.engine.submit_notation(KEY_TO_FACE[event.key] + ("'" if prime else ""))
        return True

    def _resize(self, size: int) -> None:
        if self.engine.resize(size):
            self.cam_dist = sanitize_numeric_input(7.4 + 1.5 * (self.engine.size - 3),
                                                   MIN_CAM_DIST, MAX_CAM_DIST, self.cam_dist)

    def _handle_mouse_button_down(self, event) -> None:
        if event.button == 1:
            hit = self._pick(event.pos)
            if hit is not None:
                self.drag = {'start': np.array(event.pos, dtype=float), 'hit': hit}
            else:
                self.mouse_down = True
                self.last_mouse = event.pos
        elif event.button == 4:  # wheel up
            self.cam_dist = sanitize_numeric_input(self.cam_dist / ZOOM_SENS, MIN_CAM_DIST, MAX_CAM_DIST, self.cam_dist)
        elif event.button == 5:  # wheel down
            self.cam_dist = sanitize_numeric_input(self.cam_dist * ZOOM_SENS, MIN_CAM_DIST, MAX_CAM_DIST, self.cam_dist)

    def _handle_mouse_button_up(self, event) -> None:
        if event.button == 1:
            self.mouse_down = False
            self.last_mouse = None
            self.drag = None

    def _handle_mouse_motion(self, event) -> None:
        if self.drag is not None:
            drag_vec = np.array(event.pos, dtype=float) - self.drag['start']
            view = self.camera_position()
            move = self.engine.submit_drag(self.drag['hit'], drag_vec, self.project, view)
            if move is not None:
                # One turn per drag
                self.drag = None
            elif np.linalg.norm(drag_vec) >= self.engine.resolver.min_drag_px:
                # Long enough but undecidable: the rest of the drag orbits the camera
                self.drag = None
                self.mouse_down = True
                self.last_mouse = event.pos
            return
        if self.mouse_down and self.last_mouse is not None:
            dx = event.pos[0] - self.last_mouse[0]
            dy = event.pos[1] - self.last_mouse[1]
            self.cam_yaw = (self.cam_yaw + dx * MOUSE_SENS) % 360.0
            self.cam_pitch = sanitize_numeric_input(self.cam_pitch + dy * MOUSE_SENS, MIN_PITCH, MAX_PITCH,
                                                    self.cam_pitch)
            self.last_mouse = event.pos

    def _render(self) -> None:
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()

        cube = self.engine.cube
        active = self.engine.active
        animating = set(map(id, active.pieces)) if active is not None else set()
        for piece in cube.pieces:
            glPushMatrix()
            if id(piece) in animating:
                glRotatef(math.degrees(active.current_angle), *AXIS_VECTORS[active.move.axis])
            draw_piece(piece, cube.half_extent)
            glPopMatrix()

        secs = self.engine.elapsed_ms / 1000.0
        n = self.engine.size
        solved = 'SOLVED!' if self.engine.move_count and self.engine.is_solved() else ''
        pygame.display.set_caption(
            f"Rubik's Cube {n}x{n}x{n} — Moves:{self.engine.move_count}  Time: {secs:.2f}s  {solved}")
        pygame.display.flip()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    size = 3
    if len(sys.argv) > 1 and sys.argv[1].isdigit():
        size = int(sys.argv[1])
    try:
        App(size).run()
    except KeyboardInterrupt:
        print("\nProgram interrupted by user.")
        sys.exit(0)

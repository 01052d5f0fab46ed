import logging
import pygame
from maze_animator.core.grid import Grid

logger = logging.getLogger(__name__)

class Renderer:
    COLOR_BG = (10, 10, 10)
    STATUS_COLORS = {
        Grid.BLOCKED: (40, 40, 48),
        Grid.PASSAGE: (220, 220, 220),
        Grid.FRONTIER: (60, 100, 160),      # Blue tint
        Grid.VISITED: (100, 150, 200),
        Grid.SOURCE: (220, 60, 60),
        Grid.TARGET: (60, 180, 220),
        Grid.SHORTEST_PATH: (255, 215, 0),  # Gold
    }

    KEY_MODES = {
        pygame.K_1: "blocked",
        pygame.K_2: "passage",
        pygame.K_3: "source",
        pygame.K_4: "target",
    }

    HELP = "G step gen | SPACE play gen | S step search | D play search | C clear search | R reset | 1-4 mode"

    def __init__(self, session=None, replay=None, width=1280, height=720, fps=60, record=False):
        if session is None and replay is None:
            raise ValueError("Renderer needs a session or a replay to draw")
        self.session = session
        self.replay = replay
        self.screen_width = width
        self.screen_height = height
        self.fps = fps

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        from maze_animator.viz.recorder import VideoRecorder
        self.recorder = VideoRecorder(active=record, fps=fps)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None
        self.last_cell = None # For drag painting

    @property
    def grid(self) -> Grid:
        return self.session.grid if self.session else self.replay.grid

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire grid on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        zoom_x = available_w / self.grid.width
        zoom_y = available_h / self.grid.height
        self.cell_size = max(0.001, min(zoom_x, zoom_y))

        total_w = self.grid.width * self.cell_size
        total_h = self.grid.height * self.cell_size
        self.offset_x = (self.screen_width - total_w) / 2
        self.offset_y = (self.screen_height - total_h) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Animator - {self.grid.width}x{self.grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def screen_to_world(self, sx, sy):
        wx = (sx - self.offset_x) / self.cell_size
        wy = (sy - self.offset_y) / self.cell_size
        return int(wx // 1), int(wy // 1)

    def handle_key(self, key):
        session = self.session
        if key == pygame.K_ESCAPE:
            self.running = False
        elif session is None:
            return
        elif key == pygame.K_g:
            session.step_generator()
        elif key == pygame.K_SPACE:
            session.toggle_generator()
        elif key == pygame.K_s:
            session.step_search()
        elif key == pygame.K_d:
            session.toggle_search()
        elif key == pygame.K_c:
            session.clear_search_results()
        elif key == pygame.K_r:
            session.clear()
            self.fit_to_screen()
        elif key in self.KEY_MODES:
            try:
                session.set_drawing_mode(self.KEY_MODES[key])
            except ValueError as e:
                logger.debug(str(e))

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(0.001, min(100.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.session:
                cell = self.screen_to_world(*event.pos)
                if self.grid.is_in_bounds(*cell):
                    self.session.click(*cell)
                    self.last_cell = cell

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.last_cell = None

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[2]: # Right drag pans
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]
                elif pygame.mouse.get_pressed()[0] and self.session and self.last_cell:
                    cell = self.screen_to_world(*event.pos)
                    if cell != self.last_cell:
                        self.session.drag(self.last_cell, cell)
                        self.last_cell = cell

    def draw_grid(self):
        self.surface.fill(self.COLOR_BG)
        grid = self.grid

        # Culling: Calculate visible cell range
        start_x = max(0, int((-self.offset_x) / self.cell_size))
        start_y = max(0, int((-self.offset_y) / self.cell_size))
        end_x = min(grid.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(grid.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)

        size = int(self.cell_size) + 1
        for y in range(start_y, end_y):
            row_start = y * grid.width
            py = int(y * self.cell_size + self.offset_y)
            for x in range(start_x, end_x):
                color = self.STATUS_COLORS[grid.cells[row_start + x]]
                px = int(x * self.cell_size + self.offset_x)
                pygame.draw.rect(self.surface, color, (px, py, size, size))

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        grid = self.grid
        info = [
            f"FPS: {fps}",
            f"Size: {grid.width}x{grid.height}",
        ]
        if self.session:
            info.append(f"Mode: {self.session.drawing_mode}")
            info.append(f"Status: {self.session.status_text()}")
            info.append(self.HELP)
        else:
            info.append(f"Replay: {self.replay.applied} events{' (done)' if self.replay.done else ''}")
        if self.recorder.active:
            info.append("REC")

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()

            if self.session:
                self.session.tick()
            elif not self.replay.done:
                self.replay.step(1000)

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(self.fps)

        self.recorder.stop()
        pygame.quit()

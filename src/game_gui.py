import random
import pygame
import sys

import board_engine
from best_score import BestScoreStore
from controls import direction_from_key, direction_from_swipe
from tile_view import tiles_for, tiles_after_reset


pygame.init()


COLORS = {
    'background': (248, 250, 252),
    'grid_background': (165, 174, 185),
    'empty_cell': (203, 213, 225),
    'text_dark': (51, 65, 85),
    'text_light': (255, 255, 255),
    'score_box': (226, 232, 240),
    'button': (59, 130, 246),
    'button_hover': (37, 99, 235),
    'game_over_overlay': (30, 41, 59, 200),
    'won_overlay': (21, 128, 61, 200),
    'score_gain': (22, 163, 74),
    # tile colors
    2: (219, 234, 254),
    4: (191, 219, 254),
    8: (147, 197, 253),
    16: (96, 165, 250),
    32: (59, 130, 246),
    64: (37, 99, 235),
    128: (29, 78, 216),
    256: (30, 64, 175),
    512: (30, 58, 138),
    1024: (23, 37, 84),
    2048: (15, 23, 42),
}

# animation timing
SLIDE_MS = 100
POP_MS = 120
SCORE_GAIN_MS = 600

INSTRUCTIONS = "Use arrow keys or WASD to move tiles; drag or swipe to move."


class GameGUI:
    def __init__(self, best_score_path=None, seed=None):
        """initialize game GUI"""
        self.rng = random.Random(seed)
        self.best_scores = BestScoreStore(best_score_path)
        self.best_score = self.best_scores.load()

        # GUI settings
        self.cell_size = 100
        self.cell_margin = 10
        self.header_height = 120
        self.footer_height = 40

        # window size
        grid_size = board_engine.GRID_SIZE * self.cell_size + (board_engine.GRID_SIZE + 1) * self.cell_margin
        self.window_width = grid_size
        self.window_height = grid_size + self.header_height + self.footer_height

        # create window
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("2048 Game")

        # fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        self.new_game_rect = pygame.Rect(0, 0, 130, 44)
        self.new_game_rect.center = (self.window_width // 2, 45)

        # game clock
        self.clock = pygame.time.Clock()

        # pointer position at the start of a drag/swipe
        self.swipe_start = None

        self.new_game()

    def new_game(self):
        """reset the session and show the two starting tiles"""
        self.session = board_engine.reset(self.rng)
        self.tiles = tiles_after_reset(self.session)
        self.won_dismissed = False
        self.animation_start = pygame.time.get_ticks()
        self.score_gain = 0
        self.score_gain_start = self.animation_start

    def apply_direction(self, direction):
        """send one resolved direction to the engine"""
        if direction is None or self.session.is_game_over:
            return False

        was_won = self.session.is_won
        result = board_engine.move(self.session, direction, self.rng)
        if not result.moved:
            return False

        self.session = result.session
        self.tiles = tiles_for(result)
        self.animation_start = pygame.time.get_ticks()

        if result.points:
            self.score_gain = result.points
            self.score_gain_start = self.animation_start

        # continuing to play after the win closes the overlay
        if was_won:
            self.won_dismissed = True

        self.best_score = self.best_scores.update(self.session.score)
        return True

    def get_tile_color(self, value):
        """get background color for a tile value"""
        if value in COLORS:
            return COLORS[value]
        elif value > 2048:
            return COLORS[2048]  # 2048 color for higher values
        else:
            return COLORS['empty_cell']

    def get_text_color(self, value):
        """get text color for a tile value"""
        if value <= 4:
            return COLORS['text_dark']
        else:
            return COLORS['text_light']

    def cell_origin(self, row, col):
        """top-left pixel of a grid cell"""
        x = col * (self.cell_size + self.cell_margin) + self.cell_margin
        y = row * (self.cell_size + self.cell_margin) + self.cell_margin + self.header_height
        return x, y

    def draw_board(self):
        """draw the game board"""
        # clear screen with background color
        self.screen.fill(COLORS['background'])

        self.draw_header()

        # draw the grid background
        grid_y = self.header_height
        grid_rect = pygame.Rect(0, grid_y, self.window_width, self.window_width)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        # draw empty cells, then tiles on top
        for row in range(board_engine.GRID_SIZE):
            for col in range(board_engine.GRID_SIZE):
                x, y = self.cell_origin(row, col)
                cell_rect = pygame.Rect(x, y, self.cell_size, self.cell_size)
                pygame.draw.rect(self.screen, COLORS['empty_cell'], cell_rect, border_radius=8)

        elapsed = pygame.time.get_ticks() - self.animation_start
        for tile in self.tiles:
            self.draw_tile(tile, elapsed)

        self.draw_footer()
        self.draw_overlay()

    def draw_header(self):
        """draw the header with score, best score and new game button"""
        self.draw_score_box("Score", self.session.score, 20)
        self.draw_score_box("Best", max(self.best_score, self.session.score), self.window_width - 120)

        hovered = self.new_game_rect.collidepoint(pygame.mouse.get_pos())
        color = COLORS['button_hover'] if hovered else COLORS['button']
        self.draw_button("New Game", self.new_game_rect, color)
        self.draw_score_gain()

    def draw_score_gain(self):
        """fading +N above the score box for the points of the last move"""
        elapsed = pygame.time.get_ticks() - self.score_gain_start
        if not self.score_gain or elapsed >= SCORE_GAIN_MS:
            return

        progress = elapsed / SCORE_GAIN_MS
        surface = self.font_small.render(f"+{self.score_gain}", True, COLORS['score_gain'])
        surface.set_alpha(int(255 * (1 - progress)))
        self.screen.blit(surface, surface.get_rect(center=(70, 14 - int(10 * progress))))

    def draw_score_box(self, label, value, x):
        box = pygame.Rect(x, 20, 100, 60)
        pygame.draw.rect(self.screen, COLORS['score_box'], box, border_radius=8)

        label_surface = self.font_small.render(label, True, COLORS['text_dark'])
        self.screen.blit(label_surface, label_surface.get_rect(center=(box.centerx, box.y + 16)))

        value_surface = self.font_medium.render(str(value), True, COLORS['text_dark'])
        self.screen.blit(value_surface, value_surface.get_rect(center=(box.centerx, box.y + 42)))

    def draw_button(self, text, rect, color):
        pygame.draw.rect(self.screen, color, rect, border_radius=8)
        text_surface = self.font_small.render(text, True, COLORS['text_light'])
        self.screen.blit(text_surface, text_surface.get_rect(center=rect.center))

    def draw_footer(self):
        text_surface = self.font_small.render(INSTRUCTIONS, True, COLORS['text_dark'])
        y = self.header_height + self.window_width + self.footer_height // 2
        self.screen.blit(text_surface, text_surface.get_rect(center=(self.window_width // 2, y)))

    def draw_tile(self, tile, elapsed):
        """draw a single tile, sliding in from its previous cell or popping in if new"""
        x, y = self.cell_origin(tile.row, tile.col)
        size = self.cell_size

        if tile.previous_position is not None and elapsed < SLIDE_MS:
            progress = elapsed / SLIDE_MS
            start_x, start_y = self.cell_origin(*tile.previous_position)
            x = start_x + (x - start_x) * progress
            y = start_y + (y - start_y) * progress

        if tile.is_new:
            # new tiles appear once the slide has finished
            pop = (elapsed - SLIDE_MS) / POP_MS
            if pop <= 0:
                return
            if pop < 1:
                size = int(self.cell_size * pop)
                x += (self.cell_size - size) / 2
                y += (self.cell_size - size) / 2

        cell_rect = pygame.Rect(int(x), int(y), size, size)
        pygame.draw.rect(self.screen, self.get_tile_color(tile.value), cell_rect, border_radius=8)

        if size < self.cell_size // 2:
            return

        # choose font size based on number of digits
        if tile.value < 100:
            font = self.font_large
        elif tile.value < 1000:
            font = self.font_medium
        else:
            font = self.font_small

        text_surface = font.render(str(tile.value), True, self.get_text_color(tile.value))

        # center the text in the cell
        text_rect = text_surface.get_rect()
        text_rect.center = cell_rect.center
        self.screen.blit(text_surface, text_rect)

    def overlay_button_rect(self):
        rect = pygame.Rect(0, 0, 130, 44)
        rect.center = (self.window_width // 2, self.header_height + self.window_width // 2 + 50)
        return rect

    def draw_overlay(self):
        """game over / you won overlays on top of the grid"""
        if self.session.is_game_over:
            title = "Game Over!"
            subtitle = "No more moves left"
            color = COLORS['game_over_overlay']
        elif self.session.is_won and not self.won_dismissed:
            title = "Congratulations!"
            subtitle = "Keep playing or start a new game"
            color = COLORS['won_overlay']
        else:
            return

        overlay = pygame.Surface((self.window_width, self.window_width), pygame.SRCALPHA)
        overlay.fill(color)
        self.screen.blit(overlay, (0, self.header_height))

        center_x = self.window_width // 2
        center_y = self.header_height + self.window_width // 2

        title_surface = self.font_large.render(title, True, COLORS['text_light'])
        self.screen.blit(title_surface, title_surface.get_rect(center=(center_x, center_y - 40)))

        subtitle_surface = self.font_small.render(subtitle, True, COLORS['text_light'])
        self.screen.blit(subtitle_surface, subtitle_surface.get_rect(center=(center_x, center_y)))

        self.draw_button("New Game", self.overlay_button_rect(), COLORS['button'])

    def overlay_visible(self):
        return self.session.is_game_over or (self.session.is_won and not self.won_dismissed)

    def handle_keypress(self, key, unicode=''):
        """keyboard input"""
        if key == pygame.K_ESCAPE:
            return False  # quit

        elif key == pygame.K_r:
            self.new_game()
            print("Game restarted!")

        else:
            self.apply_direction(direction_from_key(key, unicode))

        return True  # continue

    def handle_pointer_down(self, pos):
        """click on a button, or the start of a drag"""
        if self.new_game_rect.collidepoint(pos) or (
                self.overlay_visible() and self.overlay_button_rect().collidepoint(pos)):
            self.new_game()
            print("Game restarted!")
            self.swipe_start = None
            return
        self.swipe_start = pos

    def handle_pointer_up(self, pos):
        """end of a drag/swipe"""
        if self.swipe_start is None:
            return
        direction = direction_from_swipe(self.swipe_start, pos)
        self.swipe_start = None
        self.apply_direction(direction)

    def finger_position(self, event):
        """touch events carry normalized coordinates"""
        return int(event.x * self.window_width), int(event.y * self.window_height)

    def run(self):
        """main loop"""
        print("2048 Game Started!")
        print(INSTRUCTIONS)
        print("Press R to restart, ESC to quit")
        print()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_keypress(event.key, event.unicode)
                # mouse events synthesized from touches are handled as fingers
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, 'touch', False):
                    self.handle_pointer_down(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and not getattr(event, 'touch', False):
                    self.handle_pointer_up(event.pos)
                elif event.type == pygame.FINGERDOWN:
                    self.handle_pointer_down(self.finger_position(event))
                elif event.type == pygame.FINGERUP:
                    self.handle_pointer_up(self.finger_position(event))

            self.draw_board()

            # update display
            pygame.display.flip()

            # frame rate
            self.clock.tick(60)

        pygame.quit()
        print(f"Final Score: {self.session.score}")
        sys.exit()


def main():
    try:
        game = GameGUI()
        game.run()
    except Exception as e:
        print(f"Error running game: {e}")
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()

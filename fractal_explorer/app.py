"""
Main application module for the fractal explorer.

Contains the FractalExplorerApp class which handles:
- Window setup and main loop
- Translating pygame input into session events
- Displaying the images sessions produce
- The stack of open sessions (a Julia view opens on top of the Mandelbrot
  view it came from and closing it returns there)
"""

import argparse
import logging
from dataclasses import replace

import pygame

from .errors import InvalidConfigurationError
from .fractals import MANDELBROT
from .gradient import get_gradient, list_gradient_names
from .renderer import FractalRenderer, warmup_jit
from .session import FractalSession, InputEvent, Key, MouseEvent, MouseFlags
from .settings import load_settings

logger = logging.getLogger(__name__)


# pygame key -> session key code
KEY_MAP = {
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_F5: Key.F5,
    pygame.K_PLUS: Key.PLUS,
    pygame.K_KP_PLUS: Key.PLUS,
    pygame.K_EQUALS: Key.PLUS,  # unshifted "+" on most layouts
    pygame.K_MINUS: Key.MINUS,
    pygame.K_KP_MINUS: Key.MINUS,
}


def translate_key(event):
    """Map a pygame KEYDOWN event to a Key, or None if it has no meaning here."""
    if event.type != pygame.KEYDOWN:
        return None
    return KEY_MAP.get(event.key)


def translate_mouse_event(event, mods, mouse_pos):
    """
    Map a pygame mouse event to an InputEvent.

    Args:
        event: pygame event
        mods: Modifier state from pygame.key.get_mods()
        mouse_pos: Pointer position, needed for wheel events which carry none

    Returns:
        InputEvent, or None for events sessions do not handle
    """
    flags = MouseFlags.NONE
    if mods & pygame.KMOD_CTRL:
        flags |= MouseFlags.CTRL

    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        x, y = event.pos
        return InputEvent(MouseEvent.LBUTTON_DOWN, x, y, flags | MouseFlags.LBUTTON)
    elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
        x, y = event.pos
        return InputEvent(MouseEvent.LBUTTON_UP, x, y, flags)
    elif event.type == pygame.MOUSEMOTION:
        if event.buttons[0]:
            flags |= MouseFlags.LBUTTON
        x, y = event.pos
        return InputEvent(MouseEvent.MOUSE_MOVE, x, y, flags)
    elif event.type == pygame.MOUSEWHEEL:
        if event.y == 0:
            # Horizontal-only scroll has no zoom direction
            return None
        x, y = mouse_pos
        # Scroll up (away from the user) is forward
        delta = -event.y if getattr(event, 'flipped', False) else event.y
        return InputEvent(MouseEvent.MOUSE_WHEEL, x, y, flags, delta)
    return None


class FractalExplorerApp:
    """
    Main application class for the fractal explorer.

    Handles the pygame window and event loop and keeps the stack of open
    sessions. Only the top session receives input and is displayed.
    """

    # Initial view
    TITLE = "Mandelbrot set"
    DEFAULT_SIZE = (800, 700)
    DEFAULT_CENTER = complex(-0.75, 0.0)
    DEFAULT_ZOOM = 1.3

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings instance (default: load settings.json)
        """
        self.settings = settings if settings is not None else load_settings()

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        self.renderer = FractalRenderer(get_gradient(self.settings.gradient),
                                        self.settings.threads)
        self.sessions = []

        # Surface cache for the image currently on screen
        self._surface = None
        self._surface_image = None

        self.running = False

    @property
    def active_session(self):
        return self.sessions[-1] if self.sessions else None

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup_and_initial_session()

        self.running = True
        while self.running and self.sessions:
            self._handle_events()
            self._draw()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(self.DEFAULT_SIZE)
        self.clock = pygame.time.Clock()

    def _warmup_and_initial_session(self):
        """Warm up JIT and open the Mandelbrot session."""
        if self.settings.warmup:
            pygame.display.set_caption("Compiling (first run only)...")
            warmup_jit()
        self.create_session(self.TITLE, MANDELBROT, self.DEFAULT_SIZE,
                            self.DEFAULT_CENTER, self.DEFAULT_ZOOM)

    def create_session(self, title, fractal, size, center=0j, zoom=1.0):
        """
        Open a new session on top of the stack and render it.

        Also passed to every session as its spawn callback.
        """
        if self.screen is not None:
            self._resize_window(size)
            pygame.display.set_caption(f"{title} - Computing...")
            pygame.display.flip()

        session = FractalSession(
            title, fractal, size, center, zoom,
            renderer=self.renderer,
            on_image=self._on_image,
            on_spawn=self.create_session,
            on_close=self._on_close,
        )
        self.sessions.append(session)
        self._activate(session)
        logger.info("Opened %s (%d open)", title, len(self.sessions))
        return session

    def _on_image(self, session, image):
        if session is self.active_session:
            self._surface_image = None

    def _on_close(self, session):
        self.sessions.remove(session)
        logger.info("Closed %s (%d open)", session.title, len(self.sessions))
        if self.sessions:
            self._activate(self.active_session)
        else:
            self.running = False

    def _activate(self, session):
        self._surface = None
        self._surface_image = None
        if self.screen is not None:
            self._resize_window(session.size)
            pygame.display.set_caption(session.title)

    def _resize_window(self, size):
        if self.screen.get_size() != tuple(size):
            self.screen = pygame.display.set_mode(size)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                for session in list(reversed(self.sessions)):
                    session.close()
                self.running = False
                break

            session = self.active_session
            if session is None:
                break

            if event.type == pygame.KEYDOWN:
                key = translate_key(event)
                if key is not None:
                    session.handle_key(key)
                continue

            input_event = translate_mouse_event(
                event, pygame.key.get_mods(), pygame.mouse.get_pos()
            )
            if input_event is not None:
                session.handle_input(input_event)

    def _draw(self):
        """Draw the active session's image."""
        session = self.active_session
        if session is None or session.image is None:
            return

        if self._surface is None or self._surface_image is not session.image:
            self._surface = pygame.surfarray.make_surface(session.image.swapaxes(0, 1))
            self._surface_image = session.image

        self.screen.fill((0, 0, 0))
        self.screen.blit(self._surface, (0, 0))
        pygame.display.flip()


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fractal-explorer',
        description="Explore the Mandelbrot set and its Julia sets.",
    )
    parser.add_argument('--threads', type=int, default=None, metavar='N',
                        help='number of render threads (default: all cores)')
    parser.add_argument('--gradient', choices=list_gradient_names(), default=None,
                        help='color gradient')
    parser.add_argument('--settings', default=None, metavar='PATH',
                        help='settings file (default: bundled settings.json)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log debug messages')
    return parser


def apply_arguments(settings, args):
    """Override loaded settings with command line arguments."""
    overrides = {}
    if args.threads is not None:
        overrides['threads'] = args.threads
    if args.gradient is not None:
        overrides['gradient'] = args.gradient
    if args.verbose:
        overrides['log_level'] = 'DEBUG'
    return replace(settings, **overrides)


def main(argv=None):
    """
    Run the fractal explorer.

    Args:
        argv: Command line arguments (default: sys.argv[1:])
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = apply_arguments(load_settings(args.settings), args)
        app = FractalExplorerApp(settings)
    except InvalidConfigurationError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
    return 0

"""Slidr MCP Server - MCP tools for building and driving slide decks."""

from mcp.server.fastmcp import FastMCP, Context
import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Any, Optional
import os

from slidr import transitions
from slidr.core.registry import SlidrRegistry
from slidr.core.state import Slidr, SlidrSettings
from slidr.core.surface import Container, Document, MemorySurface
from slidr.core.timers import AsyncioScheduler

# Configure logging
logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("SlidrMCP")

# Default configuration
DEFAULT_TRANSITION = os.getenv("SLIDR_DEFAULT_TRANSITION", "none")
DEFAULT_AUTO_INTERVAL_MS = int(os.getenv("SLIDR_AUTO_INTERVAL_MS", 5000))
DEFAULT_SLIDE_WIDTH = 800
DEFAULT_SLIDE_HEIGHT = 600


# ── Global State ────────────────────────────────────────────────────────

_document = Document()
_registry = SlidrRegistry(_document, scheduler=AsyncioScheduler())


def _get_deck(host_id: str) -> Optional[Slidr]:
    return _registry.get(host_id)


def _missing(host_id: str) -> str:
    return f"Error: No deck '{host_id}'. Use create_deck first."


def _deck_state(deck: Slidr) -> dict:
    return {
        "current": deck.current,
        "started": deck.started,
        "auto_running": deck.auto_running,
    }


# ── Server Setup ────────────────────────────────────────────────────────

@asynccontextmanager
async def server_lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
    try:
        logger.info("SlidrMCP server starting up")
        yield {}
    finally:
        for host_id in _registry.ids():
            _registry.discard(host_id)
        logger.info("SlidrMCP server shut down")


mcp = FastMCP("SlidrMCP", lifespan=server_lifespan)


# ═══════════════════════════════════════════════════════════════════════
# DECK MANAGEMENT TOOLS
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def create_deck(ctx: Context, host_id: str, slide_ids: list[str],
                width: float = DEFAULT_SLIDE_WIDTH, height: float = DEFAULT_SLIDE_HEIGHT,
                transition: str = DEFAULT_TRANSITION, direction: str = "horizontal",
                fading: bool = True, clipping: bool = False,
                breadcrumbs: bool = False) -> str:
    """Create a container holding one element per slide id, and a deck inside it.

    Parameters:
    - host_id: Id of the container (one deck per container)
    - slide_ids: Slide ids, in document order
    - width, height: Size of every slide element in px
    - transition: Default transition for add_slides (see list_transitions)
    - direction: Default axis for add_slides: horizontal (h) or vertical (v)
    - fading: Whether linear/cube transitions also fade
    - clipping: Clip transitions at the container's borders
    - breadcrumbs: Show the breadcrumb grid on start
    """
    if _document.get_container(host_id) is None:
        container = Container(id=host_id)
        for slide_id in slide_ids:
            container.add_slide(slide_id, width=width, height=height)
        _document.add_container(container)

    try:
        settings = SlidrSettings(
            transition=transition, direction=direction, fading=fading,
            clipping=clipping, breadcrumbs=breadcrumbs,
        )
    except ValueError as e:
        return f"Error: Invalid settings: {str(e)}"

    deck = _registry.create(host_id, settings)
    if deck is None:
        return f"Error: A deck for '{host_id}' already exists."
    return json.dumps({
        "status": "created",
        "host_id": host_id,
        "candidates": _document.get_container(host_id).candidate_ids(),
        "settings": settings.model_dump(mode="json"),
    }, indent=2)


@mcp.tool()
def discard_deck(ctx: Context, host_id: str) -> str:
    """Stop and forget a deck. Its container stays in the document."""
    if not _registry.discard(host_id):
        return _missing(host_id)
    return f"Deck '{host_id}' discarded."


@mcp.tool()
def add_slides(ctx: Context, host_id: str, slide_ids: list[str], direction: str = "",
               transition: str = "", overwrite: bool = False) -> str:
    """Chain slides together along one axis.

    Parameters:
    - host_id: The deck to add to
    - slide_ids: Ordered slide ids; each is linked to the next one
    - direction: horizontal (h) or vertical (v); defaults to the deck setting
    - transition: Transition between the slides; defaults to the deck setting
    - overwrite: Replace conflicting links instead of rejecting the chain
    """
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    try:
        added = deck.add(slide_ids, direction or None, transition or None, overwrite)
    except ValueError as e:
        return f"Error: {str(e)}"
    if not added:
        conflicts = deck.builder.validate(
            slide_ids, direction or deck.settings.direction,
            transition or deck.settings.transition,
        )
        return json.dumps({"status": "rejected", "reasons": conflicts}, indent=2)
    return json.dumps({
        "status": "added",
        "slide_ids": slide_ids,
        "start": deck.start_slide,
        "coordinates": {s: list(xy) for s, xy in deck.breadcrumbs.coordinates.items()},
    }, indent=2)


@mcp.tool()
async def start_deck(ctx: Context, host_id: str, start_at: str = "") -> str:
    """Start a deck, auto-adding every slide if none were added.

    Parameters:
    - host_id: The deck to start
    - start_at: Optional slide id to start on
    """
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    if not deck.start(start_at or None):
        return f"Deck '{host_id}' is already started."
    return json.dumps({"status": "started", **_deck_state(deck)}, indent=2)


@mcp.tool()
def get_deck_status(ctx: Context, host_id: str) -> str:
    """Get a deck's slides, links, breadcrumb coordinates, and navigation state."""
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    return json.dumps(deck.to_summary(), indent=2)


@mcp.tool()
def list_transitions(ctx: Context) -> str:
    """List the available transition names."""
    return json.dumps(transitions(), indent=2)


# ═══════════════════════════════════════════════════════════════════════
# NAVIGATION TOOLS
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def can_slide(ctx: Context, host_id: str, direction: str) -> str:
    """Check whether the deck can move up, down, left, or right."""
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    try:
        return json.dumps({"direction": direction, "can_slide": deck.can_step(direction)})
    except ValueError:
        return f"Error: Unknown direction '{direction}'. Use up, down, left or right."


@mcp.tool()
def slide(ctx: Context, host_id: str, direction: str) -> str:
    """Move to the neighboring slide in a direction (up, down, left, right)."""
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    try:
        moved = deck.step(direction)
    except ValueError:
        return f"Error: Unknown direction '{direction}'. Use up, down, left or right."
    return json.dumps({"moved": moved, **_deck_state(deck)}, indent=2)


@mcp.tool()
def jump_to(ctx: Context, host_id: str, slide_id: str) -> str:
    """Jump directly to a slide."""
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    moved = deck.jump_to(slide_id)
    return json.dumps({"moved": moved, **_deck_state(deck)}, indent=2)


@mcp.tool()
def click_breadcrumb(ctx: Context, host_id: str, slide_id: str) -> str:
    """Simulate a click on a slide's breadcrumb marker."""
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    if not isinstance(deck.markers, MemorySurface):
        return "Error: This deck has no clickable breadcrumbs."
    deck.markers.click(slide_id)
    return json.dumps(_deck_state(deck), indent=2)


@mcp.tool()
async def auto_advance(ctx: Context, host_id: str, direction: str = "right",
                       interval_ms: int = DEFAULT_AUTO_INTERVAL_MS, start_at: str = "") -> str:
    """Advance the deck automatically, starting it if needed.

    Parameters:
    - host_id: The deck to advance
    - direction: up, down, left or right (default right)
    - interval_ms: Milliseconds between slides
    - start_at: Optional slide id to start on if the deck is not started yet
    """
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    try:
        deck.auto(direction, interval_ms, start_at or None)
    except ValueError as e:
        return f"Error: {str(e)}"
    return json.dumps(_deck_state(deck), indent=2)


@mcp.tool()
def stop_auto(ctx: Context, host_id: str) -> str:
    """Stop automatic advancing."""
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    if not deck.stop():
        return "Auto-advance is not running."
    return json.dumps(_deck_state(deck), indent=2)


@mcp.tool()
def toggle_breadcrumbs(ctx: Context, host_id: str) -> str:
    """Show or hide the breadcrumb grid of a started deck."""
    deck = _get_deck(host_id)
    if deck is None:
        return _missing(host_id)
    if not deck.toggle_breadcrumbs():
        return "Error: Breadcrumbs are only available once the deck is displayed."
    return json.dumps({
        "breadcrumbs_visible": deck.breadcrumbs_visible,
        "grid": deck.markers.grid if isinstance(deck.markers, MemorySurface) else None,
    }, indent=2)


# ═══════════════════════════════════════════════════════════════════════
# MCP PROMPT
# ═══════════════════════════════════════════════════════════════════════

@mcp.prompt()
def slidr_workflow() -> str:
    """Recommended workflow for building a slide deck"""
    return """You are helping the user build a navigable slide deck. Follow this workflow:

1. **Create Deck**: Use create_deck() with a host id and the slide ids.

2. **Link Slides**: Use add_slides() to chain slides horizontally or vertically.
   - Each call links every slide to the next one in the list
   - Chains that conflict with existing links are rejected; pass overwrite=True to replace them
   - Use list_transitions() to pick a transition (cube, fade, linear, none)

3. **Start**: Use start_deck(). With nothing added, all slides are chained
   using the deck's default direction and transition.

4. **Navigate**: Use slide() with up/down/left/right, jump_to() or click_breadcrumb().
   - can_slide() tells whether a direction leads anywhere
   - auto_advance() / stop_auto() control automatic advancing

Tips:
- get_deck_status() shows links, transitions and breadcrumb coordinates
- toggle_breadcrumbs() shows the grid of slides
"""


# ── Main ────────────────────────────────────────────────────────────────

def main():
    """Run the MCP server"""
    mcp.run()


if __name__ == "__main__":
    main()

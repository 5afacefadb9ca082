"""Factory helpers for creating the menu entities of each screen."""
from esper import World

from gemfall.components.game_state import GameMode
from gemfall.config import GameTexts
from gemfall.menu.components import MenuAction, MenuButton, MenuTag


def clear_menu(world: World) -> None:
    """Remove all entities that are part of the menu UI."""
    to_delete = {ent for ent, _ in world.get_component(MenuTag)}
    for ent in to_delete:
        world.delete_entity(ent, immediate=True)


def spawn_menu_for_mode(world: World, mode: GameMode, width: int, height: int, texts: GameTexts) -> None:
    """Replace the current buttons with the ones the given screen offers."""
    clear_menu(world)
    center_x = width / 2
    if mode == GameMode.TITLE:
        button_specs = (
            (texts.play_button, MenuAction.PLAY, height / 2),
            (texts.instructions_button, MenuAction.INSTRUCTIONS, height / 2 - 80.0),
        )
    elif mode == GameMode.INSTRUCTIONS:
        button_specs = ((texts.back_button, MenuAction.BACK, height * 0.2),)
    elif mode == GameMode.GAME_OVER:
        button_specs = (
            (texts.retry_button, MenuAction.PLAY, height * 0.3),
            (texts.back_button, MenuAction.BACK, height * 0.3 - 80.0),
        )
    else:
        return

    for label, action, y_position in button_specs:
        world.create_entity(
            MenuButton(label=label, action=action, x=center_x, y=y_position),
            MenuTag(),
        )

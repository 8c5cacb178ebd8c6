from colorsaver.internal.session import SessionController
from colorsaver.internal.shared_state import SharedState


def get_controller() -> SessionController:
    return SharedState().controller

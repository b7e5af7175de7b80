from swaps.services.event_service import EventService
from swaps.services.projection_service import ProjectionService
from swaps.services.swap_service import SwapService
from swaps.services.user_service import UserService

__all__ = ["EventService", "SwapService", "ProjectionService", "UserService"]

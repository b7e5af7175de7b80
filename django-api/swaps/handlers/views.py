"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to swaps.handlers.errors
- Never contain business logic
"""

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from swaps.handlers.serializers import (
    DetailedEventSerializer,
    EventCreateSerializer,
    EventSerializer,
    EventStatusSerializer,
    LoginSerializer,
    SwapRequestCreateSerializer,
    SwapRequestListsSerializer,
    SwapRequestSerializer,
    SwapResponseSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from swaps.services.registry import (
    get_event_service,
    get_projection_service,
    get_swap_service,
    get_user_service,
)


def _validated(serializer_class, request: Request) -> dict:
    serializer = serializer_class(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class UserRegistrationView(APIView):
    """Handler for POST /api/users"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        data = _validated(UserRegistrationSerializer, request)
        user = get_user_service().register_user(data["name"], data["email"], data["password"])
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """Handler for POST /api/users/login"""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        data = _validated(LoginSerializer, request)
        user = get_user_service().authenticate(data["email"], data["password"])
        return Response(UserSerializer(user).data)


class EventListView(APIView):
    """Handler for GET/POST /api/events"""

    def get(self, request: Request) -> Response:
        events = get_projection_service().list_own_events(request.user.user_id)
        return Response(EventSerializer(events, many=True).data)

    def post(self, request: Request) -> Response:
        data = _validated(EventCreateSerializer, request)
        event = get_event_service().create_event(
            request.user.user_id, data["title"], data["starts_at"], data["ends_at"]
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class OwnSwappableEventListView(APIView):
    """Handler for GET /api/events/swappable"""

    def get(self, request: Request) -> Response:
        events = get_projection_service().list_own_swappable_slots(request.user.user_id)
        return Response(EventSerializer(events, many=True).data)


class EventStatusView(APIView):
    """Handler for PATCH /api/events/{event_id}/status"""

    def patch(self, request: Request, event_id: str) -> Response:
        data = _validated(EventStatusSerializer, request)
        event = get_event_service().set_event_status(
            event_id, request.user.user_id, data["status"]
        )
        return Response(EventSerializer(event).data)


class SwappableSlotListView(APIView):
    """Handler for GET /api/swappable-slots"""

    def get(self, request: Request) -> Response:
        slots = get_projection_service().list_swappable_slots(request.user.user_id)
        return Response(DetailedEventSerializer(slots, many=True).data)


class SwapRequestListView(APIView):
    """Handler for GET/POST /api/swap-requests"""

    def get(self, request: Request) -> Response:
        lists = get_projection_service().list_swap_requests(request.user.user_id)
        return Response(SwapRequestListsSerializer(lists).data)

    def post(self, request: Request) -> Response:
        data = _validated(SwapRequestCreateSerializer, request)
        swap_request = get_swap_service().create_swap_request(
            request.user.user_id, data["requester_event_id"], data["target_event_id"]
        )
        return Response(SwapRequestSerializer(swap_request).data, status=status.HTTP_201_CREATED)


class SwapResponseView(APIView):
    """Handler for POST /api/swap-requests/{request_id}/response"""

    def post(self, request: Request, request_id: str) -> Response:
        data = _validated(SwapResponseSerializer, request)
        swap_request = get_swap_service().respond_to_swap_request(
            request_id, request.user.user_id, data["accept"]
        )
        return Response(SwapRequestSerializer(swap_request).data)

"""HTTP surface: POST <name>/ runs the named callable operation."""

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from storekeeper.callables import call
from storekeeper.exceptions import StoreError

ERROR_STATUS = {
    'UNAUTHENTICATED': status.HTTP_401_UNAUTHORIZED,
    'PERMISSION_DENIED': status.HTTP_403_FORBIDDEN,
    'NOT_FOUND': status.HTTP_404_NOT_FOUND,
    'INVALID_ARGUMENT': status.HTTP_400_BAD_REQUEST,
    'INTERNAL': status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class CallableView(APIView):
    # Caller checks happen per operation
    permission_classes = [permissions.AllowAny]

    def post(self, request, name):
        try:
            result = call(name, request.user, request.data)
        except StoreError as exc:
            return Response(
                exc.as_dict(),
                status=ERROR_STATUS.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
            )
        return Response(result)

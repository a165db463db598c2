from rest_framework import status
from rest_framework.response import Response

from .backend import get_backend


class BackendMixin:
    """
    Gives a view access to the backend client.

    Tests and alternative wiring can pass a client through
    ``as_view(backend=...)``; otherwise the process-wide client is used.
    """

    backend = None

    def get_backend(self):
        return self.backend if self.backend is not None else get_backend()


def envelope_error_response(error):
    """Turn an envelope error string into an API error response."""
    if error.endswith('not found'):
        return Response({'error': error}, status=status.HTTP_404_NOT_FOUND)
    return Response({'error': error}, status=status.HTTP_400_BAD_REQUEST)

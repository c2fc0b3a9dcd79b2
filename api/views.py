from django.http import JsonResponse


def index(request):
    return JsonResponse({"status": "ok", "docs": "/api/docs/"})


def not_found(request, exception=None):
    return JsonResponse({"detail": "Not found."}, status=404)

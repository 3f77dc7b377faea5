from django.urls import include, path

urlpatterns = [
    path("api/", include("accounts.urls")),
    path("api/", include("quizzes.urls")),
    path("api/", include("scheduler.api.urls")),
]

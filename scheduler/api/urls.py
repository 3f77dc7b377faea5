from django.urls import path
from .views import DueReviewsView, ReviewUpdateView

urlpatterns = [
    path("reviews", DueReviewsView.as_view(), name="due-reviews"),
    path("reviews/update", ReviewUpdateView.as_view(), name="review-update"),
]

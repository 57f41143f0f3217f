"""
Agora Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("votes", views.ballot_view),
    path("votes/cast", views.vote_cast_view),
    path("sessions", views.sessions_list_view),
    path("sessions/propose", views.session_propose_view),
    path("sessions/<uuid:session_id>", views.session_detail_view),
    path("sessions/<uuid:session_id>/favorite", views.session_favorite_view),
    path("favorites", views.favorites_list_view),
]

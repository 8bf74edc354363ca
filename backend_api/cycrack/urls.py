from django.urls import path
from .views import (
    health,
    start_session,
    generate_challenge,
    calculate_score,
    list_levels,
    list_ciphers,
    encode_text,
    decode_text,
    worked_example,
    solver_template,
)

urlpatterns = [
    path('health/', health, name='Health'),
    path('session', start_session, name='start-session'),
    path('challenge', generate_challenge, name='challenge'),
    path('score', calculate_score, name='score'),
    path('levels', list_levels, name='levels'),
    path('ciphers', list_ciphers, name='ciphers'),
    path('ciphers/<str:cipher_id>/encode', encode_text, name='cipher-encode'),
    path('ciphers/<str:cipher_id>/decode', decode_text, name='cipher-decode'),
    path('ciphers/<str:cipher_id>/example', worked_example, name='cipher-example'),
    path('ciphers/<str:cipher_id>/solver-template', solver_template, name='cipher-solver-template'),
]

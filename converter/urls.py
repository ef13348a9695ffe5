from django.urls import path
from . import views

urlpatterns = [
    # Subset construction
    path('api/nfa-to-dfa/', views.convert_nfa_to_dfa, name='nfa_to_dfa'),

    # NFA configuration files
    path('api/import-nfa/', views.import_nfa, name='import_nfa'),
    path('api/export-nfa/', views.export_nfa, name='export_nfa'),

    # Table layout for an existing DFA
    path('api/render-dfa-table/', views.render_dfa_table, name='render_dfa_table'),
]

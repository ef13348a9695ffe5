import json
import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .conf import get_option
from .dfa_table import dfa_statistics, table_header, table_rows
from .nfa_config import (
    NFAConfigError,
    build_transition_map,
    check_state_labels,
    dump_nfa_config,
    load_nfa_config,
    parse_nfa_config,
)
from .subset_construction import canonicalize_state_key, construct_from_config

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def convert_nfa_to_dfa(request):
    """
    Django view to handle NFA to DFA conversion requests.

    Expects a POST request with a JSON body containing:
    - nfa: The NFA configuration in the exchange format

    Returns a JSON response with the DFA table, its rendered rows and statistics.
    """
    try:
        # Parse the request body
        data = json.loads(request.body)

        if not isinstance(data, dict):
            return JsonResponse({'error': 'Request body must be a JSON object'}, status=400)

        nfa = data.get('nfa')

        if not nfa:
            return JsonResponse({'error': 'Missing NFA definition'}, status=400)

        config = parse_nfa_config(nfa)

        delimiter = get_option('STATE_DELIMITER')
        labels = check_state_labels(config, delimiter)
        if not labels['valid']:
            return JsonResponse({'error': labels['error']}, status=400)

        dfa_table = construct_from_config(config, delimiter)

        original_stats = {
            'states_count': len(config['states']),
            'alphabet_size': len(config['alphabet']),
            'transitions_count': sum(
                len(targets) for targets in build_transition_map(config['transitions']).values()
            ),
            'accepting_states_count': len(config['acceptingStates'])
        }

        if not config['transitions']:
            message = 'NFA has no transitions, DFA holds only the initial state'
        else:
            message = 'NFA successfully converted to DFA'

        logger.info("Converted NFA with %d states into %d DFA states",
                    original_stats['states_count'], len(dfa_table))

        return JsonResponse({
            'success': True,
            'initial_state': canonicalize_state_key(config['initialState'], delimiter),
            'dfa_table': dfa_table,
            'table': {
                'header': table_header(config['alphabet']),
                'rows': table_rows(dfa_table, config['alphabet'])
            },
            'statistics': {
                'original': original_stats,
                'converted': dfa_statistics(dfa_table)
            },
            'message': message
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("NFA to DFA conversion failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def import_nfa(request):
    """
    Django view to load a saved NFA configuration file.

    Accepts either a multipart upload in the 'file' field or the JSON
    document as the raw request body. Returns the normalized configuration.
    """
    try:
        if request.content_type == 'multipart/form-data':
            uploaded = request.FILES.get('file')
            if uploaded is None:
                return JsonResponse({'error': 'Missing NFA configuration file'}, status=400)
            content = uploaded.read()
        else:
            content = request.body

        config = load_nfa_config(content)

        return JsonResponse({'success': True, 'nfa': config})

    except NFAConfigError as e:
        logger.warning("Rejected NFA configuration upload: %s", e)
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("NFA import failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def export_nfa(request):
    """
    Django view to download an NFA configuration as a JSON file.

    Expects a POST request with a JSON body containing:
    - nfa: The NFA configuration to export
    """
    try:
        data = json.loads(request.body)

        if not isinstance(data, dict):
            return JsonResponse({'error': 'Request body must be a JSON object'}, status=400)

        nfa = data.get('nfa')

        if not nfa:
            return JsonResponse({'error': 'Missing NFA definition'}, status=400)

        config = parse_nfa_config(nfa)

        response = HttpResponse(dump_nfa_config(config), content_type='application/json')
        response['Content-Disposition'] = f'attachment; filename="{get_option("EXPORT_FILENAME")}"'
        return response

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("NFA export failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def render_dfa_table(request):
    """
    Django view to lay out an existing DFA table for display.

    Expects a POST request with a JSON body containing:
    - alphabet: Symbols in column order
    - dfa_table: DFA states with name, isAccepting and transitions
    """
    try:
        data = json.loads(request.body)

        if not isinstance(data, dict):
            return JsonResponse({'error': 'Request body must be a JSON object'}, status=400)

        alphabet = data.get('alphabet')
        dfa_table = data.get('dfa_table')

        if not isinstance(alphabet, list) or not isinstance(dfa_table, list):
            return JsonResponse({'error': 'alphabet and dfa_table must be lists'}, status=400)

        for dfa_state in dfa_table:
            if not isinstance(dfa_state, dict) or not isinstance(dfa_state.get('transitions'), dict) \
                    or not {'name', 'isAccepting'} <= dfa_state.keys():
                return JsonResponse({'error': 'Each DFA state needs name, isAccepting and transitions'}, status=400)

        return JsonResponse({
            'header': table_header(alphabet),
            'rows': table_rows(dfa_table, alphabet)
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("DFA table rendering failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)

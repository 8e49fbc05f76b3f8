import pytest
import requests

from conftest import make_response
from research_assistant.models import SearchResult
from research_assistant.modules.research import LangSearchReranker


@pytest.fixture
def candidates():
	return [
		SearchResult(title=f'Result {i}', url=f'https://site{i}.org/page', snippet=f'Snippet {i}', score=0.5)
		for i in range(3)
	]


def test_documents_sent_with_index_ids(session, candidates):
	session.request.return_value = make_response({'code': 200, 'results': []})

	LangSearchReranker('key', session=session).rerank('query', candidates, top_n=2)

	payload = session.request.call_args.kwargs['json']
	assert payload['top_n'] == 2
	assert payload['documents'][1] == {
		'id': '1',
		'text': 'Result 1 Snippet 1',
		'metadata': {'url': 'https://site1.org/page', 'domain': 'site1.org', 'originalScore': 0.5},
	}


@pytest.mark.parametrize('results', [[], ['not a dict', 3]])
def test_no_usable_results_keeps_original_order(session, candidates, results):
	session.request.return_value = make_response({'code': 200, 'results': results})

	reranked = LangSearchReranker('key', session=session).rerank('query', candidates, top_n=2)

	assert reranked == candidates[:2]


def test_results_mapped_back_by_id(session, candidates):
	session.request.return_value = make_response(
		{
			'code': 200,
			'results': [
				{'document': {'id': '2'}, 'relevance_score': 0.9},
				{'document': {'id': '0'}},
			],
		}
	)

	reranked = LangSearchReranker('key', session=session).rerank('query', candidates, top_n=2)

	assert [r.title for r in reranked] == ['Result 2', 'Result 0']
	assert reranked[0].score == 0.9
	assert reranked[1].score == pytest.approx(0.9)


def test_unresolvable_id_falls_back_to_first_candidate(session, candidates):
	session.request.return_value = make_response(
		{'results': [{'document': {'id': '99'}, 'relevance_score': 0.7}, {'document': 'text only'}]}
	)

	reranked = LangSearchReranker('key', session=session).rerank('query', candidates)

	assert [r.title for r in reranked] == ['Result 0', 'Result 0']


def test_error_code_keeps_original_order(session, candidates):
	session.request.return_value = make_response({'code': 401, 'msg': 'Invalid API key'})

	reranked = LangSearchReranker('key', session=session).rerank('query', candidates, top_n=2)

	assert reranked == candidates[:2]


def test_missing_results_list_keeps_original_order(session, candidates):
	session.request.return_value = make_response({'code': 200, 'data': {}})

	assert LangSearchReranker('key', session=session).rerank('query', candidates, top_n=5) == candidates


def test_transport_error_keeps_original_order(session, candidates):
	session.request.side_effect = requests.ConnectionError('refused')

	assert LangSearchReranker('key', session=session).rerank('query', candidates, top_n=1) == candidates[:1]


def test_empty_candidates(session):
	assert LangSearchReranker('key', session=session).rerank('query', []) == []
	session.request.assert_not_called()

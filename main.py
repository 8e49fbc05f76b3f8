import argparse
import json
import sys

from dotenv import load_dotenv


def main():
	load_dotenv()

	parser = argparse.ArgumentParser(description='Research Assistant')
	parser.add_argument('query', nargs='?', help='Research question to investigate')
	parser.add_argument('--style', default='apa', help='Citation style (apa, mla, ieee)')
	parser.add_argument('--tone', default='academic', help='Tone of the generated summary')
	parser.add_argument(
		'--databases', nargs='*', default=[], help='Academic databases to add (openalex crossref arxiv europepmc)'
	)
	parser.add_argument('--serve', action='store_true', help='Serve the HTTP API instead of running one query')
	parser.add_argument('--host', default='127.0.0.1')
	parser.add_argument('--port', type=int, default=8000)

	args = parser.parse_args()

	if args.serve:
		import uvicorn

		uvicorn.run('research_assistant.api.main:app', host=args.host, port=args.port)
		return

	if not args.query:
		parser.error('a query is required unless --serve is given')

	from research_assistant.config.settings import settings
	from research_assistant.core.availability import AvailabilityRegistry
	from research_assistant.core.orchestrator import ResearchPipeline
	from research_assistant.models import ResearchRequest

	pipeline = ResearchPipeline.from_settings(settings, AvailabilityRegistry.from_settings(settings))
	request = ResearchRequest(query=args.query, citationStyle=args.style, tone=args.tone, databases=args.databases)
	print(json.dumps(pipeline.run(request), indent=2, ensure_ascii=False))


if __name__ == '__main__':
	try:
		main()
	except KeyboardInterrupt:
		print('\n\nResearch interrupted.')
		sys.exit(0)
	except Exception as e:
		print(f'\nError: {e}')
		sys.exit(1)

"""
hngrep core package.

Modules
───────
models      — Pydantic data models (Item, SearchResult) and FetchOutcome
errors      — error taxonomy (PatternError, ResolutionError, FetchError, …)
client      — Hacker News API client (story list + single item fetch)
matcher     — title pattern compilation and matching
search      — concurrent fan-out / fan-in search pipeline
aggregator  — request-order sorting and SearchResult construction
formatter   — text / table / JSON rendering for the terminal
cli         — ``hngrep [options] PATTERN`` entry point
"""

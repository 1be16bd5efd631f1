
import logging
import psycopg2
import psycopg2.extras
from config import settings
from models.candidate import Candidate

logger = logging.getLogger(__name__)

CANDIDATE_COLUMNS = """
    c.id::text, c.name, c.email, c.phone,
    c.current_role, c.desired_role, c.current_company, c.location,
    c.total_experience, c.highest_qualification, c.degree,
    c.technical_skills, c.soft_skills, c.certifications, c.languages_known,
    c.summary, c.resume_text, c.tags, c.status, c.uploaded_at
"""

# Same fields the ranking code looks at, so a full-text hit is scorable locally
SEARCH_DOCUMENT = """
    to_tsvector('english',
        coalesce(c.current_role, '') || ' ' ||
        coalesce(c.desired_role, '') || ' ' ||
        coalesce(c.current_company, '') || ' ' ||
        coalesce(c.summary, '') || ' ' ||
        coalesce(c.resume_text, '') || ' ' ||
        coalesce(array_to_string(c.technical_skills, ' '), '') || ' ' ||
        coalesce(array_to_string(c.soft_skills, ' '), ''))
"""


def get_connection():
    try:
        conn = psycopg2.connect(
            settings.postgres_url,
            connect_timeout=10,
            options=f"-c statement_timeout={settings.statement_timeout_ms}",
        )
        return conn
    except Exception as e:
        logger.error("Failed to connect to PostgreSQL: %s", e)
        raise


def _run_query(sql: str, params: tuple = ()) -> list[dict]:
    try:
        conn = get_connection()
        cur = conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
    except Exception as e:
        logger.error("Could not open DB cursor: %s", e)
        raise

    try:
        cur.execute(sql, params)
        rows = cur.fetchall()
    except Exception as e:
        logger.error("SQL query failed: %s", e)
        raise
    finally:
        cur.close()
        conn.close()

    logger.debug("SQL returned %d rows", len(rows))
    return rows


def _to_candidates(rows: list[dict]) -> list[Candidate]:
    candidates = []
    skipped = 0
    for row in rows:
        try:
            candidates.append(Candidate(**dict(row)))
        except Exception as e:
            skipped += 1
            logger.warning("Skipping malformed row id=%s: %s", row.get("id"), e)

    if skipped:
        logger.warning("Skipped %d malformed rows", skipped)
    return candidates


def fetch_all_candidates() -> list[Candidate]:
    """Every candidate, newest upload first."""
    logger.info("Fetching all candidates from PostgreSQL")
    rows = _run_query(f"SELECT {CANDIDATE_COLUMNS} FROM candidates c ORDER BY c.uploaded_at DESC NULLS LAST")
    candidates = _to_candidates(rows)
    logger.info("Returning %d valid candidates", len(candidates))
    return candidates


def full_text_search(processed_query: str, limit: int = 500) -> list[Candidate]:
    """
    Postgres full-text search. websearch syntax, so quoted phrases
    and "-term" exclusions pass straight through from the caller.
    """
    logger.info("Full-text search | query='%s' limit=%d", processed_query, limit)
    rows = _run_query(
        f"""
        SELECT {CANDIDATE_COLUMNS}
        FROM candidates c
        WHERE {SEARCH_DOCUMENT} @@ websearch_to_tsquery('english', %s)
        ORDER BY ts_rank({SEARCH_DOCUMENT}, websearch_to_tsquery('english', %s)) DESC,
                 c.uploaded_at DESC NULLS LAST
        LIMIT %s
        """,
        (processed_query, processed_query, limit),
    )
    return _to_candidates(rows)


def skill_search(skills: list[str]) -> list[Candidate]:
    """Candidates listing any of the given skills, compared case-insensitively."""
    lowered = [s.lower() for s in skills]
    logger.info("Skill search | %d skills", len(lowered))
    rows = _run_query(
        f"""
        SELECT {CANDIDATE_COLUMNS}
        FROM candidates c
        WHERE EXISTS (
            SELECT 1
            FROM unnest(coalesce(c.technical_skills, '{{}}') || coalesce(c.soft_skills, '{{}}')) AS s(skill)
            WHERE lower(s.skill) = ANY(%s)
        )
        ORDER BY c.uploaded_at DESC NULLS LAST
        """,
        (lowered,),
    )
    return _to_candidates(rows)


def count_candidates() -> int:
    logger.debug("Counting candidates in DB")
    try:
        conn = get_connection()
        cur = conn.cursor()
        cur.execute("SELECT COUNT(*) FROM candidates")
        result = cur.fetchone()[0]
        cur.close()
        conn.close()
        logger.debug("Total candidates in DB: %d", result)
        return result
    except Exception as e:
        logger.error("Failed to count candidates: %s", e)
        raise

from __future__ import annotations

from jobly.db.storage import StorageClient

SAMPLE_COMPANIES: list[dict[str, object]] = [
    {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "num_employees": 1,
        "logo_url": "http://c1.img",
    },
    {
        "handle": "c2",
        "name": "C2",
        "description": "Desc2",
        "num_employees": 2,
        "logo_url": "http://c2.img",
    },
    {
        "handle": "c3",
        "name": "C3",
        "description": "Desc3",
        "num_employees": 3,
        "logo_url": "http://c3.img",
    },
]

SAMPLE_JOBS: list[dict[str, object]] = [
    {"title": "mobBoss", "salary": 500, "equity": 0.5, "company_handle": "c1"},
    {"title": "film guy", "salary": 300, "equity": 0.5, "company_handle": "c2"},
    {"title": "dead man", "salary": 666, "equity": 0.69, "company_handle": "c3"},
]


def seed_sample_data(storage: StorageClient) -> dict[str, int]:
    """Insert the sample companies and jobs that are not already present."""
    companies = 0
    for company in SAMPLE_COMPANIES:
        if storage.execute("SELECT handle FROM companies WHERE handle = $1", [company["handle"]]):
            continue
        storage.execute(
            """INSERT INTO companies (handle, name, description, num_employees, logo_url)
               VALUES ($1, $2, $3, $4, $5)""",
            [
                company["handle"],
                company["name"],
                company["description"],
                company["num_employees"],
                company["logo_url"],
            ],
        )
        companies += 1

    jobs = 0
    for job in SAMPLE_JOBS:
        if storage.execute("SELECT id FROM jobs WHERE title = $1", [job["title"]]):
            continue
        storage.execute(
            """INSERT INTO jobs (title, salary, equity, company_handle)
               VALUES ($1, $2, $3, $4)""",
            [job["title"], job["salary"], job["equity"], job["company_handle"]],
        )
        jobs += 1

    return {"seeded_companies": companies, "seeded_jobs": jobs}

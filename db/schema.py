# SQL schema for ACT Coach database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Per-user, per-word repetition state
CREATE TABLE IF NOT EXISTS word_progress (
    user_id TEXT NOT NULL,
    word TEXT NOT NULL,
    ease_factor REAL NOT NULL DEFAULT 2.5,
    interval INTEGER NOT NULL DEFAULT 1,
    next_review_date TEXT NOT NULL,
    review_count INTEGER NOT NULL DEFAULT 0,
    correct_count INTEGER NOT NULL DEFAULT 0,
    last_reviewed_at TEXT,
    status TEXT NOT NULL DEFAULT 'learning' CHECK(status IN ('learning', 'reviewing', 'mastered')),
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now')),
    PRIMARY KEY (user_id, word)
);

-- Daily missions (one per user per calendar day)
CREATE TABLE IF NOT EXISTS daily_missions (
    user_id TEXT NOT NULL,
    date TEXT NOT NULL,
    words TEXT NOT NULL DEFAULT '[]',
    progress INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL DEFAULT (datetime('now')),
    PRIMARY KEY (user_id, date)
);

-- Generated drills, cached per user, word and day
CREATE TABLE IF NOT EXISTS drill_cache (
    user_id TEXT NOT NULL,
    word TEXT NOT NULL,
    generated_date TEXT NOT NULL,
    drill_data TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    PRIMARY KEY (user_id, word, generated_date)
);

-- Study plans (one per user, replaced wholesale)
CREATE TABLE IF NOT EXISTS study_plans (
    user_id TEXT PRIMARY KEY,
    period TEXT NOT NULL CHECK(period IN ('intensive', 'accelerated', 'balanced', 'relaxed')),
    start_date TEXT NOT NULL,
    target_date TEXT NOT NULL,
    daily_goal INTEGER NOT NULL,
    total_words INTEGER NOT NULL DEFAULT 300,
    new_words_per_day INTEGER NOT NULL,
    review_words_per_day INTEGER NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

# Indexes for performance
INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_word_progress_due ON word_progress (user_id, next_review_date);
CREATE INDEX IF NOT EXISTS idx_word_progress_status ON word_progress (user_id, status);
CREATE INDEX IF NOT EXISTS idx_daily_missions_user ON daily_missions (user_id, date);
CREATE INDEX IF NOT EXISTS idx_drill_cache_day ON drill_cache (user_id, generated_date);
CREATE INDEX IF NOT EXISTS idx_drill_cache_date ON drill_cache (generated_date);
"""

# Upsert conflict keys per table
TABLE_KEYS = {
    "word_progress": ("user_id", "word"),
    "daily_missions": ("user_id", "date"),
    "drill_cache": ("user_id", "word", "generated_date"),
    "study_plans": ("user_id",),
}

# Columns the store encodes as JSON text
JSON_COLUMNS = {
    "daily_missions": ("words",),
    "drill_cache": ("drill_data",),
}

TABLE_COLUMNS = {
    "word_progress": (
        "user_id", "word", "ease_factor", "interval", "next_review_date",
        "review_count", "correct_count", "last_reviewed_at", "status",
        "created_at", "updated_at",
    ),
    "daily_missions": ("user_id", "date", "words", "progress", "updated_at"),
    "drill_cache": ("user_id", "word", "generated_date", "drill_data", "created_at"),
    "study_plans": (
        "user_id", "period", "start_date", "target_date", "daily_goal",
        "total_words", "new_words_per_day", "review_words_per_day", "updated_at",
    ),
}

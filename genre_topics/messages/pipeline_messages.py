# genre_topics/messages/pipeline_messages.py

EMPTY_CORPUS = "No documents were provided."
EMPTY_VOCABULARY = "No terms survived tokenization and stopword removal."
EMPTY_MATRIX = "Every row of the term matrix has zero total count."
TEXT_COLUMN_MISSING = "Missing '{column}' column in input file."
INVALID_NUM_TOPICS = "Number of topics must be a positive integer, got {value}."
INVALID_TOP_N = "Top-N must be a positive integer, got {value}."
INVALID_ESTIMATION_RANGE = "Invalid topic range: min_k={min_k}, max_k={max_k}."
UNKNOWN_BACKEND = "Unknown topic model backend '{backend}'."

EMPTY_ROWS_DROPPED = "Dropped {count} row(s) with zero total terms: {rows}."
TOPICS_EXCEED_ROWS = (
    "Requested {k} topics for {d} modeling row(s); with as many topics as "
    "rows or more the fit is under-determined."
)
NOT_CONVERGED = (
    "Topic model did not converge within {max_iter} iterations "
    "(last relative change {delta:.3e} > tol {tol:.1e})."
)
ZERO_VARIANCE_DROPPED = "Dropped {count} zero-variance term column(s) before PCA."
NO_VARIANCE = "Topic-term matrix has no variance; projection is degenerate."

PIPELINE_COMPLETED = "Genre topic pipeline completed."

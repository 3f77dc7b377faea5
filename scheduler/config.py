DEFAULT_EASINESS_FACTOR = 2.5
MIN_EASINESS_FACTOR = 1.3
MAX_QUALITY = 5
SUCCESS_THRESHOLD = 3     # quality >= 3 counts as a successful recall
LAPSE_INTERVAL_DAYS = 1   # review again tomorrow after a lapse
MAX_INTERVAL_DAYS = 100 * 365
FIRST_INTERVAL_DAYS = {
    1: 1,   # 1 day after the first success
    2: 6,   # 6 days after the second
}
DUE_REVIEWS_CACHE_PREFIX = "reviews:due"

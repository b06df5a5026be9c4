from prometheus_client import Counter

AUTHZ_DECISIONS = Counter(
    'rolecheck_authorization_decisions_total',
    'Authorization decisions taken by route guards',
    ['outcome'],
)

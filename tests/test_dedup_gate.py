from concurrent.futures import ThreadPoolExecutor

from linch.deduplication import DeduplicationGate


def test_claims_each_url_once():
    gate = DeduplicationGate()

    assert gate.try_claim('https://example.com/a') is True
    assert gate.try_claim('https://example.com/a') is False
    assert gate.try_claim(' https://example.com/a\n') is False
    assert gate.try_claim('https://example.com/A') is True
    assert gate.get_stats()['unique_urls'] == 2


def test_stats():
    gate = DeduplicationGate()
    for url in ['https://a.example.com', 'https://a.example.com', 'https://b.example.com']:
        gate.try_claim(url)

    assert gate.get_stats() == {'urls_processed': 3, 'duplicate_urls': 1, 'unique_urls': 2}


def test_concurrent_claims_never_double_grant():
    gate = DeduplicationGate()
    urls = [f'https://example.com/{i}' for i in range(100)]

    def claim_all(_):
        return sum(gate.try_claim(url) for url in urls)

    with ThreadPoolExecutor(max_workers=8) as executor:
        granted = sum(executor.map(claim_all, range(8)))

    assert granted == 100

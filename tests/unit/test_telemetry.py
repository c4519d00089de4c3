from jobtrail.observability.telemetry import (
    counter,
    get_counter,
    get_latency_stats,
    reset_telemetry,
    snapshot_counters,
    time_block,
)


def test_counters_accumulate_and_reset():
    counter("threads.groups_built", 3)
    counter("threads.groups_built")
    assert get_counter("threads.groups_built") == 4
    assert snapshot_counters() == {"threads.groups_built": 4}

    reset_telemetry()
    assert get_counter("threads.groups_built") == 0


def test_latency_is_recorded_under_the_given_name():
    for _ in range(3):
        with time_block("threads.group.latency"):
            pass

    stats = get_latency_stats("threads.group.latency")
    assert stats["count"] == 3
    assert stats["min"] <= stats["p50"] <= stats["max"]
    assert get_latency_stats("unknown")["count"] == 0

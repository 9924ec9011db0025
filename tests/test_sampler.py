import copy

import pytest

from dataset_reducer import ConfigError, InvalidInputError, Sampler, reduce
from dataset_reducer.config import Config
from dataset_reducer.sampler import remove_duplicates
from dataset_reducer.sampler.sampler import record_timestamp


def test_small_dataset_passes_through(make_sales):
    records = make_sales(100)
    result = reduce(records, "Show me total sales")

    assert result.sampled_records == records
    assert result.sample_size == 100
    assert result.total_records == 100


def test_small_dataset_keeps_duplicates():
    records = [{'a': '1'}] * 5
    assert reduce(records, "").sample_size == 5


def test_stratified_sampling_with_recency_tail(make_plain):
    records = make_plain(5000)
    result = reduce(records, "Show me total units")

    # every 2nd record up to the cap, then the 20 newest
    assert result.sample_size == 2020
    assert result.sampled_records[:3] == [records[0], records[2], records[4]]
    assert result.sampled_records[-20:] == records[-20:]
    assert result.total_records == 5000


def test_tail_overlapping_sample_is_deduplicated(make_plain):
    records = make_plain(500)
    result = reduce(records, "")

    assert result.sample_size == 500
    assert result.sampled_records == records


def test_exact_fill_reaches_cap(make_plain):
    records = make_plain(5000)
    result = Sampler({'exact_fill': True}).reduce(records, "")

    # 2000 spread picks, 8 of which fall inside the 20-row tail
    assert result.sample_size == 2012
    assert records[-1] in result.sampled_records


def test_all_identical_records_collapse_to_one():
    records = [{'region': 'North', 'units': '5'} for _ in range(500)]
    result = reduce(records, "")

    assert result.sample_size == 1
    assert result.sampled_records == [{'region': 'North', 'units': '5'}]


@pytest.mark.parametrize("count", [101, 150, 2001, 2500, 4001, 6100])
def test_size_bound_and_recency(make_plain, count):
    records = make_plain(count)
    result = reduce(records, "")

    assert result.total_records == count
    assert result.sample_size == len(result.sampled_records)
    assert result.sample_size <= min(2000, count) + 20
    assert records[-1] in result.sampled_records


def test_time_ordered_sampling_sorts_by_date(make_sales):
    records = make_sales(300, reverse=True)
    result = reduce(records, "")

    dates = [r['date'] for r in result.sampled_records]
    assert dates == sorted(dates)
    assert result.sampled_records[0] == records[-1]
    assert result.sample_size == 300


def test_records_without_dates_sort_first(make_sales):
    records = make_sales(150)
    records[120]['date'] = 'n/a'
    result = reduce(records, "")

    assert result.sampled_records[0]['date'] == 'n/a'


def test_input_is_not_modified(make_sales):
    records = make_sales(400, reverse=True)
    snapshot = copy.deepcopy(records)

    reduce(records, "")

    assert records == snapshot


def test_summary_covers_full_dataset(make_sales):
    result = reduce(make_sales(5000), "")

    assert result.summary.total_records == 5000
    assert result.summary.numeric_stats['revenue'].count == 5000
    assert result.summary.date_columns == ['date']


def test_custom_cap_and_tail(make_plain):
    sampler = Sampler({'max_sample_size': 50, 'recency_tail': 5})
    records = make_plain(1000)
    result = sampler.reduce(records, "")

    assert result.sample_size == 55
    assert result.sampled_records[-5:] == records[-5:]


def test_result_serializes_with_camel_case(make_plain):
    data = reduce(make_plain(200), "").to_dict()
    assert set(data) == {'sampledRecords', 'summary', 'sampleSize', 'totalRecords'}
    assert data['sampleSize'] == len(data['sampledRecords'])


@pytest.mark.parametrize("bad", [None, "abc", {"a": "1"}, [1, 2, 3]])
def test_invalid_dataset(bad):
    with pytest.raises(InvalidInputError):
        reduce(bad, "question")


def test_remove_duplicates_ignores_key_order():
    records = [{'a': '1', 'b': '2'}, {'b': '2', 'a': '1'}, {'a': '1', 'b': '3'}]
    assert remove_duplicates(records) == [{'a': '1', 'b': '2'}, {'a': '1', 'b': '3'}]


def test_remove_duplicates_distinguishes_types():
    assert len(remove_duplicates([{'a': '1'}, {'a': 1}])) == 2


def test_record_timestamp_uses_first_date_field():
    assert record_timestamp({'name': 'x', 'created': '2024-01-01', 'closed': '2020-01-01'}) > \
        record_timestamp({'closed': '2020-01-01'})
    assert record_timestamp({'name': 'x'}) == 0.0


@pytest.mark.parametrize("settings", [
    {'max_sample_size': 0},
    {'max_sample_size': -5},
    {'max_sample_size': '10'},
    {'max_sample_size': 2.5},
    {'recency_tail': -1},
    {'small_dataset_threshold': -1},
    {'small_dataset_threshold': None},
])
def test_rejects_invalid_settings(settings):
    with pytest.raises(ConfigError):
        Sampler(config=settings)


def test_zero_tail_and_threshold_are_allowed(make_plain):
    sampler = Sampler(config={'small_dataset_threshold': 0, 'max_sample_size': 1, 'recency_tail': 0})
    result = sampler.reduce(make_plain(3))

    assert result.sample_size == 1


def test_rejects_zero_sample_size_from_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / 'empty.yaml'
    path.write_text("")
    monkeypatch.setenv('MAX_SAMPLE_SIZE', '0')

    config = Config(str(path))
    with pytest.raises(ConfigError):
        Sampler(config.get_stage_config('sampler'))

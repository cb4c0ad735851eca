from __future__ import annotations

from rental_insights.schemas import FilterCriteria
from rental_insights.services.listing_pipeline import ListingDataHandler, run_analysis
from rental_insights.services.result_exporter import read_export

SCENARIO_A = [
    {"price": "$100", "bedrooms": "2", "review_scores_rating": "4.5", "host_id": "h1", "host_name": "Alice"},
    {"price": "$200", "bedrooms": "4", "review_scores_rating": "3.0", "host_id": "h1", "host_name": "Alice"},
]


def _host_listings(host_id: str, host_name: str, count: int) -> list[dict[str, str]]:
    return [
        {"id": f"{host_id}-{n}", "price": "$120", "bedrooms": "2", "host_id": host_id, "host_name": host_name}
        for n in range(count)
    ]


def test_run_analysis_min_price_scenario() -> None:
    result = run_analysis(SCENARIO_A, FilterCriteria(min_price=150))

    assert result.records_loaded == 2
    assert result.filtered_listings == [SCENARIO_A[1]]
    assert result.statistics.model_dump(by_alias=True) == {
        "totalListings": 1,
        "averagePricePerRoom": "50.00",
    }
    assert [entry.model_dump(by_alias=True) for entry in result.host_ranking] == [
        {"hostId": "h1", "hostName": "Alice", "listingsCount": 1}
    ]


def test_run_analysis_on_empty_input() -> None:
    result = run_analysis([], FilterCriteria(min_price=10))

    assert result.filtered_listings == []
    assert result.statistics.total_listings == 0
    assert result.statistics.average_price_per_room == "NaN"
    assert result.host_ranking == []


def test_run_analysis_ranks_busier_host_first() -> None:
    records = _host_listings("h1", "Alice", 3) + _host_listings("h2", "Bob", 5)

    result = run_analysis(records, FilterCriteria())

    assert [(e.host_id, e.listings_count) for e in result.host_ranking] == [("h2", 5), ("h1", 3)]


def test_run_analysis_is_repeatable() -> None:
    criteria = FilterCriteria(max_rooms=3)

    assert run_analysis(SCENARIO_A, criteria) == run_analysis(SCENARIO_A, criteria)


def test_handler_starts_with_empty_derived_state() -> None:
    handler = ListingDataHandler(SCENARIO_A)

    assert handler.get_data() == SCENARIO_A
    assert handler.get_filtered_data() == []
    assert handler.get_statistics() is None
    assert handler.get_host_ranking() == []


def test_handler_statistics_before_filter_use_empty_subset() -> None:
    handler = ListingDataHandler(SCENARIO_A).compute_statistics().compute_host_ranking()

    assert handler.get_statistics().average_price_per_room == "NaN"
    assert handler.get_host_ranking() == []


def test_handler_chain_matches_pure_pipeline() -> None:
    criteria = FilterCriteria(min_price=150)
    handler = ListingDataHandler(SCENARIO_A).filter_listings(criteria).compute_statistics().compute_host_ranking()

    expected = run_analysis(SCENARIO_A, criteria)
    assert handler.get_filtered_data() == expected.filtered_listings
    assert handler.get_statistics() == expected.statistics
    assert handler.get_host_ranking() == expected.host_ranking
    assert handler.build_export() == expected.to_export()


def test_handler_refilter_replaces_subset() -> None:
    handler = ListingDataHandler(SCENARIO_A)

    handler.filter_listings(FilterCriteria(min_price=150))
    assert len(handler.get_filtered_data()) == 1
    handler.filter_listings(FilterCriteria())
    assert handler.get_filtered_data() == SCENARIO_A


def test_handler_strict_bounds_flag() -> None:
    handler = ListingDataHandler(SCENARIO_A, strict_bounds=True)

    handler.filter_listings(FilterCriteria(max_price=0))

    assert handler.get_filtered_data() == []


def test_handler_from_path_and_export(tmp_path) -> None:
    source = tmp_path / "listings.csv"
    source.write_text(
        "id,price,bedrooms,review_scores_rating,host_id,host_name\n"
        "1,$100,2,4.5,h1,Alice\n"
        "2,$200,4,3.0,h1,Alice\n",
        encoding="utf-8",
    )
    target = tmp_path / "out.json"

    handler = ListingDataHandler.from_path(source)
    returned = (
        handler.filter_listings(FilterCriteria(min_price=150))
        .compute_statistics()
        .compute_host_ranking()
        .export_results(target)
    )

    assert returned is handler
    bundle = read_export(target)
    assert [row["id"] for row in bundle.filtered_listings] == ["2"]
    assert bundle.statistics.average_price_per_room == "50.00"
    assert bundle.host_ranking[0].listings_count == 1

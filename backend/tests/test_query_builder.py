import pytest
from pydantic import ValidationError

from jobboard.services.query_builder import SearchCriteria, build_job_query


class TestSearchCriteriaFromQueryParams:
    def test_defaults(self):
        c = SearchCriteria.from_query_params()
        assert c.q == ""
        assert c.location == ""
        assert c.radius_miles is None
        assert c.sort == "newest"
        assert c.page == 1
        assert c.limit == 20
        assert c.offset == 0
        assert not c.wants_radius

    @pytest.mark.parametrize("raw,expected", [("0", 1), ("-5", 1), ("abc", 1), ("3", 3), ("3abc", 3), ("999999", 10_000)])
    def test_page_is_clamped(self, raw, expected):
        assert SearchCriteria.from_query_params(page=raw).page == expected

    @pytest.mark.parametrize("raw,expected", [("0", 1), ("500", 50), ("x", 20), ("10", 10)])
    def test_limit_is_clamped(self, raw, expected):
        assert SearchCriteria.from_query_params(limit=raw).limit == expected

    def test_limit_follows_configured_maximum(self):
        c = SearchCriteria.from_query_params(limit="80", max_limit=100)
        assert c.limit == 80

    def test_installer_default_limit(self):
        assert SearchCriteria.from_query_params(default_limit=12).limit == 12

    def test_offset(self):
        c = SearchCriteria.from_query_params(page="2", limit="10")
        assert c.offset == 10

    @pytest.mark.parametrize("raw", [None, "", "abc", "0", "-10", "inf", "nan"])
    def test_bad_radius_disables_radius_search(self, raw):
        c = SearchCriteria.from_query_params(location="Austin, TX", radius=raw)
        assert c.radius_miles is None
        assert not c.wants_radius

    def test_radius_needs_location(self):
        assert not SearchCriteria.from_query_params(radius="50").wants_radius
        assert SearchCriteria.from_query_params(location="Austin, TX", radius="50").wants_radius

    def test_radius_accepts_decimals(self):
        assert SearchCriteria.from_query_params(location="Austin", radius="12.5").radius_miles == 12.5

    def test_non_finite_radius_set_directly(self):
        assert not SearchCriteria(location="Austin", radius_miles=float("inf")).wants_radius

    def test_unknown_sort_falls_back(self):
        assert SearchCriteria.from_query_params(sort="random").sort == "newest"
        assert SearchCriteria.from_query_params(sort="highest-pay").sort == "highest-pay"

    def test_unknown_job_type_dropped(self):
        assert SearchCriteria.from_query_params(job_type="internship").job_type is None
        assert SearchCriteria.from_query_params(job_type="gig").job_type == "gig"

    def test_pay_bounds_are_clamped(self):
        c = SearchCriteria.from_query_params(pay_min="-100", pay_max="99999999")
        assert c.pay_min == 0
        assert c.pay_max == 1_000_000

    def test_unparseable_pay_uses_safe_defaults(self):
        c = SearchCriteria.from_query_params(pay_min="lots", pay_max="lots")
        assert c.pay_min == 0
        assert c.pay_max == 1_000_000

    def test_keyword_is_sanitized_and_truncated(self):
        c = SearchCriteria.from_query_params(q="tint%' OR 1=1; --_" + "x" * 200)
        assert "%" not in c.q and "'" in c.q and "_" not in c.q and ";" not in c.q
        assert len(c.q) <= 80

    def test_location_keeps_comma(self):
        assert SearchCriteria.from_query_params(location=" Austin, TX% ").location == "Austin, TX"

    def test_trade_is_lowercased(self):
        assert SearchCriteria.from_query_params(trade="  Vinyl Wrap ").trade == "vinyl wrap"

    def test_criteria_are_immutable(self):
        c = SearchCriteria.from_query_params()
        with pytest.raises(ValidationError):
            c.page = 3


class TestBuildJobQuery:
    def test_location_filter_can_be_left_out(self, db, make_job):
        make_job(location_city="Round Rock", location_state="TX")
        criteria = SearchCriteria(location="Austin")
        now = "2026-06-01T00:00:00Z"

        with_location = build_job_query(db, criteria, now).ordered().all()
        without_location = build_job_query(db, criteria, now, include_location=False).ordered().all()

        assert with_location == []
        assert len(without_location) == 1

    def test_query_is_not_executed_until_asked(self, db):
        built = build_job_query(db, SearchCriteria(sort="highest-pay"), "2026-06-01T00:00:00Z")
        assert len(built.order_by) == 4
        assert "ORDER BY" in str(built.ordered())

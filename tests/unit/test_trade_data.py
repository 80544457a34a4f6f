"""Unit tests for trade models and trade sources."""

import pytest
from datetime import date

from power_position.data.models import AggregationResult, DiscardedPeriod, Trade, TradePeriod
from power_position.data.sources import SimulatedTradeSource, StaticTradeSource, YamlTradeSource
from power_position.errors import MalformedTradeError, TradeSourceError


class TestTradeModels:
    """Test trade construction helpers."""

    def test_from_volumes_numbers_periods_from_one(self):
        trade = Trade.from_volumes(date(2023, 7, 2), [1, 2, 3])

        assert trade.periods == (
            TradePeriod(period=1, volume=1.0),
            TradePeriod(period=2, volume=2.0),
            TradePeriod(period=3, volume=3.0),
        )

    def test_from_dict(self):
        trade = Trade.from_dict({
            "date": "2023-07-02",
            "periods": [{"period": 1, "volume": "100.5"}, {"period": 24, "volume": -3}],
        })

        assert trade.date == date(2023, 7, 2)
        assert trade.periods == (TradePeriod(1, 100.5), TradePeriod(24, -3.0))

    def test_from_dict_without_periods(self):
        assert Trade.from_dict({"date": date(2023, 7, 2)}).periods == ()

    @pytest.mark.parametrize("raw", [
        {},
        {"date": "02/07/2023"},
        {"date": "2023-07-02", "periods": [{"period": "one", "volume": 1}]},
        {"date": "2023-07-02", "periods": [{"volume": 1}]},
    ])
    def test_from_dict_malformed(self, raw):
        with pytest.raises(MalformedTradeError) as exc_info:
            Trade.from_dict(raw)

        assert exc_info.value.raw_data == raw

    def test_trades_are_immutable(self):
        trade = Trade.from_volumes(date(2023, 7, 2), [1.0])
        with pytest.raises(AttributeError):
            trade.date = date(2023, 7, 3)

    def test_discarded_volume(self):
        result = AggregationResult(discarded=[
            DiscardedPeriod(period=24, volume=10.0, reason="beyond_grid"),
            DiscardedPeriod(period=0, volume=-2.5, reason="out_of_range"),
        ])
        assert result.discarded_volume == pytest.approx(7.5)


class TestStaticTradeSource:
    def test_returns_trades_for_date(self, day_ahead_trades):
        source = StaticTradeSource({date(2023, 7, 2): day_ahead_trades})

        assert source.get_trades(date(2023, 7, 2)) == day_ahead_trades
        assert source.get_trades(date(2023, 7, 3)) == []
        assert source.get_stats() == {"name": "static", "request_count": 2}

    def test_add_trade(self):
        source = StaticTradeSource()
        trade = Trade.from_volumes(date(2023, 7, 2), [5.0])
        source.add_trade(trade)

        assert source.get_trades(date(2023, 7, 2)) == [trade]

    def test_returned_list_is_a_copy(self, day_ahead_trades):
        source = StaticTradeSource({date(2023, 7, 2): day_ahead_trades})
        source.get_trades(date(2023, 7, 2)).clear()

        assert len(source.get_trades(date(2023, 7, 2))) == 3


class TestSimulatedTradeSource:
    def test_generates_full_days(self):
        trades = SimulatedTradeSource(seed=7, max_trades=4).get_trades(date(2023, 7, 2))

        assert 1 <= len(trades) <= 4
        for trade in trades:
            assert trade.date == date(2023, 7, 2)
            assert [p.period for p in trade.periods] == list(range(1, 25))
            assert all(-500.0 <= p.volume <= 500.0 for p in trade.periods)

    def test_seed_is_deterministic(self):
        first = SimulatedTradeSource(seed=42).get_trades(date(2023, 7, 2))
        second = SimulatedTradeSource(seed=42).get_trades(date(2023, 7, 2))
        assert first == second

    def test_failure_rate_raises(self):
        source = SimulatedTradeSource(seed=1, failure_rate=1.0)

        with pytest.raises(TradeSourceError) as exc_info:
            source.get_trades(date(2023, 7, 2))

        assert exc_info.value.local_date == date(2023, 7, 2)

    @pytest.mark.parametrize("kwargs", [{"max_trades": 0}, {"failure_rate": 1.5}, {"failure_rate": -0.1}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            SimulatedTradeSource(**kwargs)


class TestYamlTradeSource:
    """Test the file-backed trade source."""

    def write_trades(self, tmp_path, content: str):
        path = tmp_path / "trades.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    def test_returns_trades_for_requested_date(self, tmp_path):
        path = self.write_trades(tmp_path, (
            "trades:\n"
            "  - date: 2023-07-02\n"
            "    periods:\n"
            "      - {period: 1, volume: 100}\n"
            "      - {period: 2, volume: -20.5}\n"
            "  - date: 2023-07-03\n"
            "    periods:\n"
            "      - {period: 1, volume: 7}\n"
        ))
        source = YamlTradeSource(path)

        trades = source.get_trades(date(2023, 7, 2))

        assert trades == [Trade(date=date(2023, 7, 2), periods=(TradePeriod(1, 100.0), TradePeriod(2, -20.5)))]
        assert source.get_trades(date(2023, 7, 4)) == []
        assert source.get_stats() == {"name": "yaml", "request_count": 2}

    def test_file_is_reread_on_every_request(self, tmp_path):
        path = self.write_trades(tmp_path, "trades: []\n")
        source = YamlTradeSource(path)
        assert source.get_trades(date(2023, 7, 2)) == []

        path.write_text("trades:\n  - {date: 2023-07-02, periods: [{period: 3, volume: 1}]}\n", encoding="utf-8")

        assert len(source.get_trades(date(2023, 7, 2))) == 1

    def test_empty_file_has_no_trades(self, tmp_path):
        assert YamlTradeSource(self.write_trades(tmp_path, "")).get_trades(date(2023, 7, 2)) == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(TradeSourceError, match="Cannot read trade file"):
            YamlTradeSource(tmp_path / "absent.yaml").get_trades(date(2023, 7, 2))

    @pytest.mark.parametrize("content", ["- 1\n- 2\n", "trades: 5\n"])
    def test_unexpected_layout_raises(self, tmp_path, content):
        with pytest.raises(TradeSourceError, match="'trades' list"):
            YamlTradeSource(self.write_trades(tmp_path, content)).get_trades(date(2023, 7, 2))

    def test_malformed_record_fails_whole_request(self, tmp_path):
        path = self.write_trades(tmp_path, (
            "trades:\n"
            "  - {date: 2023-07-02, periods: [{period: 1, volume: 10}]}\n"
            "  - {date: 2023-07-02, periods: [{volume: 10}]}\n"
        ))

        with pytest.raises(TradeSourceError) as exc_info:
            YamlTradeSource(path).get_trades(date(2023, 7, 2))

        assert isinstance(exc_info.value.__cause__, MalformedTradeError)
        assert exc_info.value.context["index"] == 1
        assert exc_info.value.local_date == date(2023, 7, 2)

"""Tests for technical indicators."""

import math

import pytest

from tascreen.indicators import (
    calculate_adx,
    calculate_atr,
    calculate_bollinger,
    calculate_ema,
    calculate_macd,
    calculate_obv,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
    calculate_vwap,
)
from tascreen.models.ohlc import OHLCBar


def _values(series):
    return [p.value for p in series]


def _first_defined(series):
    return next(i for i, p in enumerate(series) if p.value is not None)


class TestSMA:
    """Tests for SMA calculation."""

    def test_sma_basic(self, make_bars):
        """SMA averages the trailing closes."""
        result = calculate_sma(make_bars([100, 102, 104, 106, 108]), 3)

        assert result[0].value is None
        assert result[1].value is None
        assert result[2].value == pytest.approx(102)  # (100+102+104)/3
        assert result[3].value == pytest.approx(104)
        assert result[4].value == pytest.approx(106)

    def test_sma_insufficient_data(self, make_bars):
        """Too little history leaves every position undefined."""
        result = calculate_sma(make_bars([100, 101, 102]), 5)

        assert len(result) == 3
        assert all(v is None for v in _values(result))

    def test_sma_preserves_times(self, make_bars):
        """Each output point carries the time of its input bar."""
        bars = make_bars([100, 102, 104])
        result = calculate_sma(bars, 2)

        assert [p.time for p in result] == ["2024-01-01", "2024-01-02", "2024-01-03"]

    def test_sma_rejects_non_positive_period(self, make_bars):
        with pytest.raises(ValueError):
            calculate_sma(make_bars([100, 101]), 0)


class TestEMA:
    """Tests for EMA calculation."""

    def test_ema_basic(self, make_bars):
        """First EMA is the SMA, later values follow the recurrence."""
        result = calculate_ema(make_bars([100, 102, 104, 106, 108]), 3)

        assert result[0].value is None
        assert result[1].value is None
        assert result[2].value == pytest.approx(102)
        # multiplier = 2 / (3 + 1) = 0.5
        assert result[3].value == pytest.approx(104)  # 102 + 0.5 * (106 - 102)
        assert result[4].value == pytest.approx(106)

    def test_ema_first_value_equals_sma(self, make_bars, zigzag_closes):
        """EMA and SMA share their first defined value."""
        bars = make_bars(zigzag_closes)
        ema = calculate_ema(bars, 10)
        sma = calculate_sma(bars, 10)

        assert _first_defined(ema) == _first_defined(sma) == 9
        assert ema[9].value == sma[9].value

    def test_ema_insufficient_data(self, make_bars):
        result = calculate_ema(make_bars([100, 101, 102]), 10)

        assert len(result) == 3
        assert all(v is None for v in _values(result))


class TestRSI:
    """Tests for RSI calculation."""

    def test_rsi_insufficient_data(self, make_bars):
        """RSI needs period + 1 bars."""
        result = calculate_rsi(make_bars([100.0 + i for i in range(14)]), 14)

        assert len(result) == 14
        assert all(v is None for v in _values(result))

    def test_rsi_first_defined_at_period(self, make_bars, zigzag_closes):
        result = calculate_rsi(make_bars(zigzag_closes), 14)

        assert _first_defined(result) == 14

    def test_rsi_bounded(self, make_bars, zigzag_closes):
        """RSI stays within [0, 100]."""
        result = calculate_rsi(make_bars(zigzag_closes), 14)

        for value in _values(result):
            if value is not None:
                assert 0 <= value <= 100

    def test_rsi_all_gains(self, make_bars):
        """A strictly rising series drives RSI above 95."""
        result = calculate_rsi(make_bars([100.0 + i for i in range(30)]), 14)

        assert result[-1].value > 95

    def test_rsi_all_losses(self, make_bars):
        """A strictly falling series drives RSI below 5."""
        result = calculate_rsi(make_bars([200.0 - i for i in range(30)]), 14)

        assert result[-1].value < 5

    def test_rsi_flat_series_is_neutral(self, make_bars):
        result = calculate_rsi(make_bars([100.0] * 20), 14)

        assert result[-1].value == pytest.approx(50)


class TestMACD:
    """Tests for MACD calculation."""

    def test_macd_alignment(self, make_bars, zigzag_closes):
        """All three series have the input's length."""
        bars = make_bars(zigzag_closes)
        result = calculate_macd(bars)

        assert len(result.macd) == len(bars)
        assert len(result.signal) == len(bars)
        assert len(result.histogram) == len(bars)

    def test_macd_first_defined_indices(self, make_bars, zigzag_closes):
        """MACD starts with the slow EMA, signal after `signal` MACD values."""
        result = calculate_macd(make_bars(zigzag_closes), 12, 26, 9)

        assert _first_defined(result.macd) == 25
        assert _first_defined(result.signal) == 33
        assert _first_defined(result.histogram) == 33

    def test_histogram_is_macd_minus_signal(self, make_bars, zigzag_closes):
        result = calculate_macd(make_bars(zigzag_closes))

        for m, s, h in zip(result.macd, result.signal, result.histogram):
            if m.value is not None and s.value is not None:
                assert h.value == pytest.approx(m.value - s.value, abs=1e-9)

    def test_histogram_sign_flag(self, make_bars, zigzag_closes):
        result = calculate_macd(make_bars(zigzag_closes))

        for point in result.histogram:
            if point.value is None:
                assert point.is_positive is None
            else:
                assert point.is_positive == (point.value >= 0)

    def test_macd_insufficient_data(self, make_bars):
        result = calculate_macd(make_bars([100.0 + i for i in range(10)]))

        assert result.macd[0].value is None
        assert all(v is None for v in _values(result.signal))
        assert all(v is None for v in _values(result.histogram))


class TestBollinger:
    """Tests for Bollinger Bands."""

    def test_bollinger_alignment(self, make_bars, zigzag_closes):
        bars = make_bars(zigzag_closes)
        result = calculate_bollinger(bars)

        assert len(result.upper) == len(result.middle) == len(result.lower) == len(bars)

    def test_middle_equals_sma(self, make_bars, zigzag_closes):
        """The middle band is the SMA, bar for bar."""
        bars = make_bars(zigzag_closes)
        result = calculate_bollinger(bars, 20, 2)
        sma = calculate_sma(bars, 20)

        assert _values(result.middle) == _values(sma)

    def test_band_ordering(self, make_bars, zigzag_closes):
        result = calculate_bollinger(make_bars(zigzag_closes))

        for u, m, l in zip(result.upper, result.middle, result.lower):
            if u.value is not None:
                assert u.value > m.value > l.value

    def test_wider_multiplier_widens_band(self, make_bars, zigzag_closes):
        bars = make_bars(zigzag_closes)
        narrow = calculate_bollinger(bars, 20, 1)
        wide = calculate_bollinger(bars, 20, 3)

        for i in range(19, len(bars)):
            narrow_width = narrow.upper[i].value - narrow.lower[i].value
            wide_width = wide.upper[i].value - wide.lower[i].value
            assert wide_width > narrow_width

    def test_population_std(self, make_bars):
        """Band offset uses the population standard deviation."""
        result = calculate_bollinger(make_bars([1.0, 2.0, 3.0, 4.0]), 4, 1)

        std = math.sqrt(((1.5 ** 2) + (0.5 ** 2) * 2 + (1.5 ** 2)) / 4)
        assert result.upper[3].value == pytest.approx(2.5 + std)
        assert result.lower[3].value == pytest.approx(2.5 - std)


class TestATR:
    """Tests for ATR calculation."""

    def test_atr_constant_range(self):
        """Constant 2-point candles give an ATR of 2."""
        bars = [
            OHLCBar(time=f"2024-01-{i + 1:02d}", open=101, high=102, low=100, close=101)
            for i in range(20)
        ]
        result = calculate_atr(bars, 9)

        assert result[-1].value == pytest.approx(2.0)

    def test_atr_first_defined_at_period(self, make_bars, zigzag_closes):
        result = calculate_atr(make_bars(zigzag_closes), 14)

        assert _first_defined(result) == 14

    def test_atr_positive(self, make_bars, zigzag_closes):
        result = calculate_atr(make_bars(zigzag_closes), 14)

        for value in _values(result):
            if value is not None:
                assert value > 0

    def test_atr_increases_with_volatility(self, make_bars, zigzag_closes):
        """Larger high-low spreads give a larger ATR at the same period."""
        calm = calculate_atr(make_bars(zigzag_closes, spread=0.5), 14)
        wild = calculate_atr(make_bars(zigzag_closes, spread=5.0), 14)

        assert wild[-1].value > calm[-1].value

    def test_atr_insufficient_data(self, make_bars):
        result = calculate_atr(make_bars([100.0] * 5), 9)

        assert len(result) == 5
        assert all(v is None for v in _values(result))


class TestStochastic:
    """Tests for the Stochastic Oscillator."""

    def test_stochastic_first_defined_indices(self, make_bars, zigzag_closes):
        result = calculate_stochastic(make_bars(zigzag_closes), 14, 3, 3)

        assert _first_defined(result.k) == 15
        assert _first_defined(result.d) == 17

    def test_stochastic_bounded(self, make_bars, zigzag_closes):
        result = calculate_stochastic(make_bars(zigzag_closes))

        for value in _values(result.k) + _values(result.d):
            if value is not None:
                assert 0 <= value <= 100

    def test_zero_range_is_fifty(self, make_bars):
        """A window with no range reads 50."""
        result = calculate_stochastic(make_bars([100.0] * 20, spread=0.0))

        assert result.k[-1].value == pytest.approx(50)
        assert result.d[-1].value == pytest.approx(50)

    def test_fast_stochastic(self, make_bars):
        """With no smoothing %K is the raw position within the range."""
        closes = [10.0, 12.0, 14.0, 11.0]
        result = calculate_stochastic(make_bars(closes, spread=1.0), 3, 1, 1)

        # window bars 1..3: lowest low 10, highest high 15, close 11
        assert result.k[3].value == pytest.approx(100 * (11 - 10) / (15 - 10))
        assert result.d[3].value == result.k[3].value


class TestADX:
    """Tests for ADX / DI."""

    def test_adx_alignment_and_start(self, make_bars, zigzag_closes):
        bars = make_bars(zigzag_closes)
        result = calculate_adx(bars, 14)

        assert len(result.adx) == len(result.di_plus) == len(result.di_minus) == len(bars)
        assert _first_defined(result.di_plus) == 14
        assert _first_defined(result.adx) == 27

    def test_uptrend(self, make_bars):
        """A clean uptrend has +DI above -DI and a maximal ADX."""
        result = calculate_adx(make_bars([100.0 + 2 * i for i in range(40)]), 14)

        assert result.di_plus[-1].value > result.di_minus[-1].value
        assert result.di_minus[-1].value == pytest.approx(0)
        assert result.adx[-1].value == pytest.approx(100)

    def test_adx_bounded(self, make_bars, zigzag_closes):
        result = calculate_adx(make_bars(zigzag_closes), 14)

        for series in (result.adx, result.di_plus, result.di_minus):
            for value in _values(series):
                if value is not None:
                    assert 0 <= value <= 100

    def test_adx_insufficient_data(self, make_bars):
        result = calculate_adx(make_bars([100.0 + i for i in range(14)]), 14)

        assert all(v is None for v in _values(result.adx))
        assert all(v is None for v in _values(result.di_plus))


class TestOBV:
    """Tests for On-Balance Volume."""

    def test_obv_running_sum(self):
        closes = [10, 11, 10, 10, 12]
        bars = [
            OHLCBar(time=f"2024-01-0{i + 1}", open=c, high=c, low=c, close=c, volume=100)
            for i, c in enumerate(closes)
        ]
        result = calculate_obv(bars)

        assert _values(result) == [100, 200, 100, 100, 200]

    def test_obv_missing_volume_counts_as_zero(self, make_bars):
        result = calculate_obv(make_bars([10, 11, 12], volume=None))

        assert _values(result) == [0, 0, 0]


class TestVWAP:
    """Tests for VWAP."""

    def test_vwap_cumulative(self):
        bars = [
            OHLCBar(time="2024-01-01", open=10, high=12, low=8, close=10, volume=100),
            OHLCBar(time="2024-01-02", open=10, high=22, low=18, close=20, volume=300),
        ]
        result = calculate_vwap(bars)

        assert result[0].value == pytest.approx(10)
        assert result[1].value == pytest.approx((10 * 100 + 20 * 300) / 400)

    def test_vwap_skips_bars_without_volume(self, make_bars):
        result = calculate_vwap(make_bars([10, 11, 12], volume=None))

        assert all(v is None for v in _values(result))


class TestShortInput:
    """Every indicator keeps its length on too-short input."""

    @pytest.mark.parametrize("count", [0, 1])
    def test_all_undefined(self, make_bars, count):
        bars = make_bars([100.0] * count)

        for series in (
            calculate_sma(bars, 1),
            calculate_ema(bars, 1),
            calculate_rsi(bars),
            calculate_atr(bars),
            calculate_obv(bars),
            calculate_vwap(bars),
            calculate_macd(bars).histogram,
            calculate_bollinger(bars).upper,
            calculate_stochastic(bars).k,
            calculate_adx(bars).adx,
        ):
            assert len(series) == count
            assert all(v is None for v in _values(series))

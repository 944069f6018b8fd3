from tradingdash.gridpools import DrilldownState, best_pool
from tradingdash.types import GridpoolOrder, GridpoolResp, GridpoolTrade

TN = "10YDE-EON------1"
P1 = "2026-05-13T12:00:00Z"
P2 = "2026-05-13T13:00:00Z"


def make_pool(pool_id, trades):
    return GridpoolResp(id=pool_id, name=f"pool{pool_id}", areas=(TN,), orders=0, trades=trades)


def make_order(order_id, period=P1):
    return GridpoolOrder(
        id=order_id,
        side="MARKET_SIDE_BUY",
        area=TN,
        period=period,
        order_type="ORDER_TYPE_LIMIT",
        price="85",
        quantity="2",
        open_quantity="2",
        filled_quantity="0",
        state="ORDER_STATE_ACTIVE",
        state_reason="STATE_REASON_ADD",
        state_actor="MARKET_ACTOR_USER",
        create_time="2026-05-13T08:00:00+00:00",
        modification_time="2026-05-13T08:00:00+00:00",
    )


def make_fill(trade_id, order_id):
    return GridpoolTrade(
        id=trade_id,
        order_id=order_id,
        side="MARKET_SIDE_BUY",
        area=TN,
        period=P1,
        execution_time="2026-05-13T11:00:00+00:00",
        price="85",
        quantity="1",
        state="TRADE_STATE_ACTIVE",
    )


def test_best_pool_empty():
    assert best_pool([]) is None


def test_best_pool_picks_most_trades_last_on_tie():
    pools = [make_pool(1, 5), make_pool(2, 9), make_pool(3, 9), make_pool(4, 2)]
    assert best_pool(pools).id == 3


def test_update_pools_auto_selects_and_marks_loaded():
    state = DrilldownState()
    assert not state.loaded
    state.update_pools([make_pool(1, 1), make_pool(2, 7)])
    assert state.selected == 2
    assert state.loaded
    assert [p.id for p in state.pools] == [1, 2]


def test_update_pools_keeps_existing_selection():
    state = DrilldownState()
    state.select_pool(1)
    state.update_pools([make_pool(1, 1), make_pool(2, 7)])
    assert state.selected == 1


def test_update_pools_empty_leaves_selection_unset():
    state = DrilldownState()
    state.update_pools([])
    assert state.selected is None
    assert state.loaded


def test_select_pool_resets_children():
    state = DrilldownState()
    state.select_pool(1)
    state.update_orders([make_order(7)])
    state.set_period_filter(P1)
    state.select_order(7)
    state.trades = [make_fill(100, 7)]
    state.select_pool(2)
    assert state.selected == 2
    assert state.selected_order is None
    assert state.period_filter is None
    assert state.trades == []
    assert state.orders == []


def test_set_period_filter_empty_means_all():
    state = DrilldownState()
    state.set_period_filter(P1)
    assert state.period_filter == P1
    state.set_period_filter("")
    assert state.period_filter is None


def test_update_orders_drops_stale_period_filter():
    state = DrilldownState(selected=1)
    state.update_orders([make_order(1, P1), make_order(2, P2)])
    state.set_period_filter(P2)
    state.update_orders([make_order(1, P1)])
    assert state.period_filter is None


def test_update_orders_keeps_live_period_filter():
    state = DrilldownState(selected=1)
    state.set_period_filter(P1)
    state.update_orders([make_order(1, P1), make_order(2, P2)])
    assert state.period_filter == P1


def test_update_orders_drops_vanished_order():
    state = DrilldownState(selected=1)
    state.update_orders([make_order(7)])
    state.select_order(7)
    state.trades = [make_fill(100, 7)]
    state.update_orders([make_order(8)])
    assert state.selected_order is None
    assert state.trades == []


def test_update_orders_keeps_live_order():
    state = DrilldownState(selected=1)
    state.update_orders([make_order(7)])
    state.select_order(7)
    state.update_orders([make_order(7), make_order(8)])
    assert state.selected_order == 7


def test_visible_orders_filters_by_period():
    state = DrilldownState(selected=1)
    state.update_orders([make_order(1, P1), make_order(2, P2), make_order(3, P1)])
    assert [o.id for o in state.visible_orders()] == [1, 2, 3]
    state.set_period_filter(P1)
    assert [o.id for o in state.visible_orders()] == [1, 3]


def test_visible_orders_empty_without_selection():
    state = DrilldownState()
    state.update_orders([make_order(1)])
    assert state.visible_orders() == []


def test_period_options_sorted_and_deduplicated():
    state = DrilldownState(selected=1)
    state.update_orders([make_order(1, P2), make_order(2, P1), make_order(3, P2)])
    assert state.period_options() == [P1, P2]
from http import HTTPStatus
from unittest import mock

import httpx

from enums import ListStatus
from tests.factories import CarTypeFactory, envelope
from ui.components import render_list
from ui.models import ListSnapshot
from ui.tabs.content import toggle_car_type, toggle_key


class TestRenderList:
    def test_failed_first_load_shows_empty_state(self) -> None:
        snapshot = ListSnapshot(status=ListStatus.ERROR, error="Database unavailable")
        render_rows = mock.Mock()

        with (
            mock.patch("ui.components.st") as mock_st,
            mock.patch("ui.components.search_input"),
            mock.patch("ui.components.sync_view", return_value=snapshot),
            mock.patch("ui.components.skeleton") as mock_skeleton,
        ):
            result = render_list(
                key="dealers", view=mock.Mock(tabs=[]), render_rows=render_rows
            )

        assert result is snapshot
        mock_st.error.assert_called_once_with("Database unavailable")
        mock_st.info.assert_called_once_with("No results")
        mock_skeleton.assert_not_called()
        render_rows.assert_not_called()

    def test_first_load_in_progress_shows_skeleton(self) -> None:
        with (
            mock.patch("ui.components.st") as mock_st,
            mock.patch("ui.components.search_input"),
            mock.patch("ui.components.sync_view", return_value=ListSnapshot()),
            mock.patch("ui.components.skeleton") as mock_skeleton,
        ):
            render_list(key="dealers", view=mock.Mock(tabs=[]), render_rows=mock.Mock())

        mock_skeleton.assert_called_once_with()
        mock_st.info.assert_not_called()


class TestToggleCarType:
    def test_failed_update_restores_switch(self, signed_in, make_client) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(
                HTTPStatus.INTERNAL_SERVER_ERROR, json={"message": "Try again"}
            )

        car_type = CarTypeFactory(isActive=True)
        key = toggle_key(car_type["_id"])
        view = mock.Mock()

        with (
            mock.patch("ui.tabs.content.st") as mock_st,
            mock.patch("ui.tabs.content.show_error") as mock_show_error,
        ):
            mock_st.session_state = {key: False}
            toggle_car_type(make_client(handler), view, car_type)

        assert len(requests) == 1
        assert mock_st.session_state[key] is True
        mock_show_error.assert_called_once()
        view.controller.patch.assert_not_called()

    def test_successful_update_patches_list(self, signed_in, make_client) -> None:
        car_type = CarTypeFactory(isActive=True)
        key = toggle_key(car_type["_id"])
        view = mock.Mock()
        client = make_client(
            lambda request: httpx.Response(HTTPStatus.OK, json=envelope({}))
        )

        with mock.patch("ui.tabs.content.st") as mock_st:
            mock_st.session_state = {key: False}
            toggle_car_type(client, view, car_type)

        assert mock_st.session_state[key] is False
        view.controller.patch.assert_called_once_with(
            record_id=car_type["_id"], changes={"isActive": False}
        )

#!/usr/bin/env python3
"""
Unit tests for the command line driver.
"""

import unittest
import uuid
from unittest.mock import MagicMock, patch

import main
from core.matching.exceptions import CalculationCancelledError, NoActiveUsersError


class TestArgumentParsing(unittest.TestCase):

    def test_calculate_bid(self):
        bid_id = uuid.uuid4()
        args = main.parse_args(["--actor-role", "leader", "calculate-bid", str(bid_id), "--force"])
        self.assertEqual(args.command, "calculate-bid")
        self.assertEqual(args.bid_id, bid_id)
        self.assertTrue(args.force)
        self.assertEqual(args.actor_role, "leader")

    def test_calculate_requirement(self):
        requirement_id = uuid.uuid4()
        args = main.parse_args(["calculate-requirement", str(requirement_id)])
        self.assertEqual(args.requirement_id, requirement_id)
        self.assertEqual(args.actor_role, "admin")
        self.assertEqual(args.config, "config.yaml")

    def test_rejects_malformed_ids(self):
        with self.assertRaises(SystemExit):
            main.parse_args(["calculate-bid", "not-a-uuid"])

    def test_command_is_required(self):
        with self.assertRaises(SystemExit):
            main.parse_args([])


class TestMain(unittest.TestCase):

    def setUp(self):
        main.cancel_event.clear()
        patcher = patch("main.signal.signal")
        patcher.start()
        self.addCleanup(patcher.stop)
        patcher = patch("main.build_session_factory", return_value=(MagicMock(), MagicMock()))
        patcher.start()
        self.addCleanup(patcher.stop)

    @patch("main.init_db")
    def test_init_db(self, mock_init_db):
        self.assertEqual(main.main(["init-db"]), 0)
        mock_init_db.assert_called_once()

    @patch("main.run_calculate_bid")
    def test_calculate_bid_passes_actor(self, mock_run):
        actor_id = uuid.uuid4()
        bid_id = uuid.uuid4()

        self.assertEqual(main.main(["--actor-id", str(actor_id), "calculate-bid", str(bid_id)]), 0)

        _, _, called_bid, actor = mock_run.call_args.args
        self.assertEqual(called_bid, bid_id)
        self.assertEqual(actor.user_id, actor_id)
        self.assertEqual(actor.role, "admin")
        self.assertFalse(mock_run.call_args.kwargs["force"])

    @patch("main.run_calculate_requirement", side_effect=NoActiveUsersError())
    def test_matching_error_exit_code(self, _):
        self.assertEqual(main.main(["calculate-requirement", str(uuid.uuid4())]), 1)

    @patch("main.run_calculate_bid", side_effect=CalculationCancelledError(completed=[], total=2))
    def test_cancelled_exit_code(self, _):
        self.assertEqual(main.main(["calculate-bid", str(uuid.uuid4())]), 130)

    def test_signal_sets_cancel_event(self):
        main.signal_handler(2, None)
        self.assertTrue(main.cancel_event.is_set())
        main.cancel_event.clear()


if __name__ == "__main__":
    unittest.main()

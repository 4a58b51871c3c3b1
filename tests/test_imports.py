from __future__ import annotations

import allocplan


def test_public_api_is_exported():
    for name in allocplan.__all__:
        assert hasattr(allocplan, name), name


def test_cli_entrypoint_importable():
    from allocplan.app import build_arg_parser, main
    from allocplan.settings import Settings

    assert callable(main)
    parser = build_arg_parser(Settings())
    args = parser.parse_args(["weeks", "x.csv"])
    assert args.weeks == 12

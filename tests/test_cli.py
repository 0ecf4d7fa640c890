"""Tests for the command line interface."""

from unittest.mock import MagicMock, patch

import pytest

from shulkers import __version__
from shulkers.cli import build_parser, main
from shulkers.config import Settings
from shulkers.models import CatalogRecord, Source
from shulkers.resolver import CandidateReason, CandidateSet, Empty, SingleMatch
from shulkers.service import SearchResults
from shulkers.sources import CatalogError


def run(argv):
    """Run main() with default settings and return the exit code."""
    with patch("shulkers.cli.Settings.load", return_value=Settings()):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
    return excinfo.value.code


@pytest.fixture
def finder():
    """Replace PluginFinder so no command touches the network."""
    with patch("shulkers.commands.PluginFinder") as finder_class:
        instance = MagicMock()
        finder_class.from_settings.return_value = instance
        yield instance


@pytest.fixture
def vault():
    return CatalogRecord(id="34315", display_name="Vault", source=Source.SPIGOT, author="MilkBowl")


class TestParser:
    def test_commands(self):
        parser = build_parser()
        args = parser.parse_args(["search", "vault", "-l", "3", "-s", "spigot"])
        assert (args.query, args.limit, args.source) == ("vault", "3", "spigot")

        args = parser.parse_args(["i", "vault", "worldedit"])
        assert args.names == ["vault", "worldedit"]

    def test_version(self, capsys):
        main(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert run([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestSearchCommand:
    """Tests for `shulkers search`."""

    @pytest.mark.parametrize(
        "argv",
        [
            ["search"],
            ["search", "vault", "--limit", "0"],
            ["search", "vault", "--limit", "ten"],
            ["search", "vault", "--source", "curseforge"],
        ],
    )
    def test_invalid_input_fails_before_network(self, finder, argv):
        assert run(argv) == 1
        finder.search.assert_not_called()

    def test_results(self, finder, vault, capsys):
        finder.search.return_value = SearchResults(records=[vault], counts={Source.SPIGOT: 1})

        assert run(["search", "vault", "--source", "spigot", "--limit", "2"]) == 0

        finder.search.assert_called_once_with("vault", 2, Source.SPIGOT)
        out = capsys.readouterr().out
        assert "Found 1 plugins" in out
        assert "MilkBowl" in out

    def test_default_limit_from_settings(self, finder):
        finder.search.return_value = SearchResults()
        assert run(["search", "vault"]) == 0
        finder.search.assert_called_once_with("vault", 10, None)

    def test_no_results_reports_errors(self, finder, capsys):
        finder.search.return_value = SearchResults(errors={Source.MODRINTH: "timed out"})

        assert run(["search", "vault"]) == 0
        out = capsys.readouterr().out
        assert "No plugins found" in out
        assert "Error searching Modrinth" in out


class TestInfoCommand:
    """Tests for `shulkers info`."""

    @pytest.mark.parametrize(
        "argv",
        [
            ["info"],
            ["info", "--id", "34315"],
            ["info", "--id", "abc", "--source", "spigot"],
            ["info", "vault", "--source", "bukkit"],
        ],
    )
    def test_invalid_input(self, finder, argv):
        assert run(argv) == 1
        finder.find.assert_not_called()
        finder.lookup.assert_not_called()

    def test_single_match(self, finder, vault, capsys):
        finder.find.return_value = (SingleMatch(vault), SearchResults(records=[vault]))

        assert run(["info", "vault"]) == 0
        assert "Plugin Details" in capsys.readouterr().out
        assert finder.find.call_args.kwargs["limit"] == 5

    def test_candidates(self, finder, vault, capsys):
        other = CatalogRecord(id="abc", display_name="Vault", source=Source.MODRINTH)
        outcome = CandidateSet((vault, other), CandidateReason.EXACT_NAME_COLLISION, exact_matches=2)
        finder.find.return_value = (outcome, SearchResults(records=[vault, other]))

        assert run(["info", "vault"]) == 0
        out = capsys.readouterr().out
        assert "2 exact matches" in out
        assert "Plugin Details" not in out

    def test_empty(self, finder, capsys):
        finder.find.return_value = (Empty(), SearchResults())
        assert run(["info", "nothing"]) == 0
        assert "No plugins found" in capsys.readouterr().out

    def test_by_id(self, finder, vault, capsys):
        finder.lookup.return_value = vault

        assert run(["info", "--id", "34315", "--source", "spigot"]) == 0
        finder.lookup.assert_called_once_with("34315", Source.SPIGOT)
        assert "MilkBowl" in capsys.readouterr().out

    def test_by_id_not_found(self, finder):
        finder.lookup.return_value = None
        assert run(["info", "--id", "nope", "--source", "modrinth"]) == 1

    def test_by_id_failure(self, finder):
        finder.lookup.side_effect = CatalogError("Cannot connect to Modrinth")
        assert run(["info", "--id", "abc", "--source", "modrinth"]) == 1


class TestInstallCommand:
    def test_not_available(self, finder, capsys):
        assert run(["install", "vault"]) == 0
        assert "not available yet" in capsys.readouterr().out

    def test_force_is_reported(self, finder, capsys):
        assert run(["install", "vault", "--force"]) == 0
        assert "vault, forced" in capsys.readouterr().out

    def test_id_is_not_accepted(self, finder):
        assert run(["install", "--id", "34315"]) == 2

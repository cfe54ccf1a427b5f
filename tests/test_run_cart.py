from run_cart import main


def test_runner_prints_total(capsys):
    code = main(["--add", "120P90", "--add", "120P90", "--add", "120P90"])

    out = capsys.readouterr().out
    assert code == 0
    assert "total: 99.98" in out
    assert "'120P90': 7" in out


def test_runner_remove_and_checkout_twice(capsys):
    code = main(["--add", "120P90"] * 4 + ["--remove", "120P90", "--checkout-twice"])

    out = capsys.readouterr().out
    assert code == 0
    assert "total: 49.99" in out


def test_runner_reports_cart_errors(capsys):
    code = main(["--remove", "120P90"])

    assert code == 1
    assert "error: Item 120P90 is not in the cart" in capsys.readouterr().out


def test_runner_lists_registered_promotions(capsys):
    main([])

    out = capsys.readouterr().out
    assert "promo 43N23P x1 -> 234234 100% QUALIFIED_GROUPS" in out
    assert "promo A304SD x3 -> A304SD 10% ALL" in out

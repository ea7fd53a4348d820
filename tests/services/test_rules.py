class TestRuleService:
    """Tests for RuleService."""

    def test_active_only(self, services):
        services.rules.create("Low savings block", "savings < 5000", "block_discretionary_over_100")
        paused = services.rules.create(
            "Delivery warning", "delivery_mtd > 100", "warn_delivery_spending"
        )
        services.rules.set_active(paused.id, False)

        assert len(services.rules.find_all()) == 2
        assert [r.name for r in services.rules.find_all(active_only=True)] == [
            "Low savings block"
        ]

from apartment_manager.managers import AccountManager
from apartment_manager.models import Role, TenantAccount


class TestAccountManager:
    def test_seeded_accounts(self, accounts):
        assert [(a.username, a.role) for a in accounts.list_all()] == [
            ("admin", Role.ADMIN),
            ("user", Role.REGULAR),
            ("manager", Role.REGULAR),
        ]

    def test_authenticate_admin(self, accounts):
        assert accounts.authenticate("admin", "adminpass") is Role.ADMIN

    def test_username_is_case_insensitive_password_is_not(self, accounts):
        assert accounts.authenticate("ADMIN", "adminpass") is Role.ADMIN
        assert accounts.authenticate("admin", "AdminPass") is None

    def test_wrong_password_and_unknown_user_look_the_same(self, accounts):
        wrong_password = accounts.authenticate("admin", "wrong")
        unknown_user = accounts.authenticate("nosuchuser", "x")

        assert wrong_password is None
        assert unknown_user is None
        assert wrong_password == unknown_user

    def test_add_duplicate_username_any_case(self, accounts):
        assert accounts.add(TenantAccount("carol", "pw", Role.REGULAR)) is True
        assert accounts.add(TenantAccount("CAROL", "other", Role.ADMIN)) is False
        assert len(accounts) == 4

    def test_update_changes_password_and_role(self, accounts):
        assert accounts.update(TenantAccount("User", "newpass", Role.ADMIN)) is True

        assert accounts.authenticate("user", "password") is None
        assert accounts.authenticate("user", "newpass") is Role.ADMIN
        assert accounts.find_by_key("user").username == "user"

    def test_update_unknown_user(self, accounts):
        assert accounts.update(TenantAccount("ghost", "pw")) is False
        assert len(accounts) == 3

    def test_delete(self, accounts):
        assert accounts.delete("MANAGER") is True
        assert accounts.authenticate("manager", "manage123") is None
        assert accounts.delete("manager") is False

    def test_round_trip(self, accounts):
        accounts.add(TenantAccount("dave", "s3cret", Role.REGULAR))
        accounts.persist()

        reloaded = AccountManager(accounts.path)

        assert reloaded.list_all() == accounts.list_all()
        assert accounts.path.read_text(encoding="utf-8").splitlines()[0] == "admin,adminpass,admin"

    def test_store_with_only_bad_lines_is_seeded(self, tmp_path):
        path = tmp_path / "users.dat"
        path.write_text("no-commas-here\nbob,pw,wizard\n", encoding="utf-8")

        manager = AccountManager(path)

        assert manager.authenticate("admin", "adminpass") is Role.ADMIN
        assert manager.find_by_key("bob") is None

    def test_existing_store_is_not_seeded(self, tmp_path):
        path = tmp_path / "users.dat"
        path.write_text("erin,pw,Admin\n", encoding="utf-8")

        manager = AccountManager(path)

        assert [a.username for a in manager.list_all()] == ["erin"]
        assert manager.authenticate("erin", "pw") is Role.ADMIN

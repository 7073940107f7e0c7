from sqlmodel import Session

from matchday.services.notification_service import NotificationService, dispatch_quietly, list_notifications


def test_send_and_list_newest_first(session: Session):
    service = NotificationService(session)
    first = service.send(1, "MATCH_VERIFY", "Confirm match result", "Lions (2) - (1) Tigers")
    second = service.send(1, "REQUEST_ACCEPTED", "Your request was accepted", "User 4 answered")
    service.send(2, "MATCH_VERIFY", "Confirm match result", "other user")

    inbox = list_notifications(session, 1)

    assert [n.id for n in inbox] == [second.id, first.id]
    assert all(not n.is_read for n in inbox)


def test_unread_only(session: Session):
    service = NotificationService(session)
    read = service.send(1, "MATCH_VERIFY", "t", "m")
    unread = service.send(1, "MATCH_VERIFY", "t", "m")
    read.is_read = True
    session.add(read)
    session.commit()

    assert [n.id for n in list_notifications(session, 1, unread_only=True)] == [unread.id]


def test_dispatch_quietly_swallows_failure(session: Session, monkeypatch, caplog):
    def boom(self, *args, **kwargs):
        raise RuntimeError("inbox down")

    monkeypatch.setattr(NotificationService, "send", boom)

    with caplog.at_level("WARNING"):
        assert dispatch_quietly(session, 1, "MATCH_VERIFY", "t", "m") is False

    assert "inbox down" in caplog.text


def test_dispatch_quietly_success(session: Session):
    assert dispatch_quietly(session, 1, "MATCH_VERIFY", "t", "m") is True
    assert len(list_notifications(session, 1)) == 1

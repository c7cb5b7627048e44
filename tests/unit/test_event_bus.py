import threading
from pathlib import Path
from ibc.infrastructure.event_bus import EventBus
from ibc.domain.events import Event, DiscoveryStarted, DiscoveryFinished

def test_publish_reaches_subscribers_of_exact_type():
    bus = EventBus()
    started, finished = [], []
    bus.subscribe(DiscoveryStarted, started.append)
    bus.subscribe(DiscoveryFinished, finished.append)

    bus.publish(DiscoveryStarted(directory=Path("icons")))

    assert len(started) == 1
    assert finished == []

def test_base_type_subscribers_are_not_called():
    bus = EventBus()
    received = []
    bus.subscribe(Event, received.append)

    bus.publish(DiscoveryFinished(files_found=3))

    assert received == []

def test_publish_from_many_threads():
    bus = EventBus()
    received = []
    lock = threading.Lock()

    def on_event(event):
        with lock:
            received.append(event)

    bus.subscribe(DiscoveryFinished, on_event)
    threads = [
        threading.Thread(target=bus.publish, args=(DiscoveryFinished(files_found=i),))
        for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(e.files_found for e in received) == list(range(20))

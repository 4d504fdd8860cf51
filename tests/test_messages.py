"""
Tests for manual sending and the message list placeholder.
"""

PHONE = "5491122334455"


def _connect(client):
    client.post("/api/whatsapp/events", json={"event": "ready"})


class TestSendMessage:

    def test_not_connected(self, client, auth_headers, transport):
        response = client.post("/api/send-message", json={"phone": PHONE, "message": "hola"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "WhatsApp no está conectado"}
        assert transport.sent == []

    def test_suffix_added(self, client, auth_headers, transport):
        _connect(client)
        response = client.post("/api/send-message", json={"phone": PHONE, "message": "hola"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Mensaje enviado"}
        assert transport.sent == [(f"{PHONE}@c.us", "hola")]

    def test_chat_id_kept(self, client, auth_headers, transport):
        _connect(client)
        client.post("/api/send-message", json={"phone": f"{PHONE}@c.us", "message": "hola"}, headers=auth_headers)
        assert transport.sent == [(f"{PHONE}@c.us", "hola")]

    def test_transport_failure(self, client, auth_headers, transport):
        _connect(client)
        transport.fail_with = "Gateway respondió 502"
        response = client.post("/api/send-message", json={"phone": PHONE, "message": "hola"}, headers=auth_headers)
        assert response.status_code == 500
        assert response.json() == {"error": "Error al enviar mensaje", "details": "Gateway respondió 502"}


class TestMessages:

    def test_empty_list(self, client):
        assert client.get("/api/messages").json() == {"messages": []}

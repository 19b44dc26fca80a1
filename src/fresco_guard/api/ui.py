"""Single-page client served at the site root."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["ui"])


@router.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Minimal client that consumes the JSON API."""
    return HTMLResponse(_HOME_HTML)


_HOME_HTML = """<!doctype html>
<html lang="es">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>FrescoGuard</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      .stats span { margin-right: 1rem; }
      input { padding: 0.4rem 0.6rem; margin-right: 0.5rem; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      li.expired { color: #b91c1c; }
      li.expiring-soon { color: #b45309; }
      li.safe { color: #15803d; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>FrescoGuard</h1>
    <div class="row" id="session">Cargando...</div>
    <form class="row" id="signin">
      <input id="email" type="email" placeholder="Email" />
      <input id="password" type="password" placeholder="Contraseña" />
      <button type="submit">Iniciar sesión</button>
      <a href="/api/auth/google">Continuar con Google</a>
    </form>
    <div class="row stats" id="stats"></div>
    <form class="row" id="add-food">
      <input id="food-name" placeholder="Alimento" />
      <input id="food-date" type="date" />
      <button type="submit">Añadir</button>
    </form>
    <div class="row">
      <button onclick="setFilter(null)">Todos</button>
      <button onclick="setFilter('expiring')">Por vencer</button>
      <button onclick="setFilter('expired')">Vencidos</button>
      <button onclick="setFilter('safe')">Seguros</button>
    </div>
    <ul id="foods"></ul>
    <pre id="output">Listo.</pre>
    <script>
      const CHECK_INTERVAL_MS = 5 * 60 * 1000;
      let currentFilter = null;

      async function api(path, options = {}) {
        const res = await fetch(path, {
          credentials: 'same-origin',
          headers: { 'Content-Type': 'application/json' },
          ...options
        });
        const data = await res.json().catch(() => ({}));
        if (!res.ok) {
          throw new Error(data.error || 'Error ' + res.status);
        }
        return data;
      }

      function show(message) {
        document.getElementById('output').textContent = message;
      }

      async function loadSession() {
        const data = await api('/api/auth/user');
        const session = document.getElementById('session');
        session.textContent = data.authenticated
          ? 'Hola, ' + (data.user.name || data.user.email) + ' (' + data.user.plan + ')'
          : 'No has iniciado sesión.';
        return data.authenticated;
      }

      async function loadDashboard() {
        const data = await api('/api/dashboard');
        const stats = data.stats;
        document.getElementById('stats').innerHTML =
          '<span>Total: ' + stats.totalFoods + '</span>' +
          '<span>Vencidos: ' + stats.expiredCount + '</span>' +
          '<span>Por vencer: ' + stats.expiringSoonCount + '</span>' +
          '<span>Seguros: ' + stats.safeCount + '</span>';
      }

      async function loadFoods() {
        const query = currentFilter ? '?filter=' + currentFilter : '';
        const data = await api('/api/foods' + query);
        const list = document.getElementById('foods');
        list.innerHTML = '';
        for (const food of data.foods) {
          const item = document.createElement('li');
          item.className = food.expiry_status;
          item.textContent = food.name + ' (' + food.expiry_date + ')';
          list.appendChild(item);
        }
      }

      function setFilter(value) {
        currentFilter = value;
        loadFoods().catch((err) => show(err.message));
      }

      async function checkNotifications() {
        if (document.visibilityState !== 'visible') {
          return;
        }
        try {
          await api('/api/notifications/process', { method: 'POST' });
          const pending = await api('/api/notifications/pending');
          if (!('Notification' in window) || Notification.permission !== 'granted') {
            return;
          }
          for (const item of pending) {
            new Notification(item.title, { body: item.message, tag: item.id });
            await api('/api/notifications/' + item.id + '/read', { method: 'POST' });
          }
        } catch (err) {
          console.warn('Notification check failed', err);
        }
      }

      async function refresh() {
        await loadDashboard();
        if (await loadSession()) {
          await loadFoods();
          await checkNotifications();
        }
      }

      document.getElementById('signin').addEventListener('submit', async (event) => {
        event.preventDefault();
        try {
          await api('/api/auth/signin', {
            method: 'POST',
            body: JSON.stringify({
              email: document.getElementById('email').value,
              password: document.getElementById('password').value
            })
          });
          if ('Notification' in window && Notification.permission === 'default') {
            await Notification.requestPermission();
          }
          await refresh();
        } catch (err) {
          show(err.message);
        }
      });

      document.getElementById('add-food').addEventListener('submit', async (event) => {
        event.preventDefault();
        try {
          const data = await api('/api/foods', {
            method: 'POST',
            body: JSON.stringify({
              name: document.getElementById('food-name').value,
              expiryDate: document.getElementById('food-date').value
            })
          });
          show(JSON.stringify(data.food, null, 2));
          await refresh();
        } catch (err) {
          show(err.message);
        }
      });

      document.addEventListener('visibilitychange', checkNotifications);
      setInterval(checkNotifications, CHECK_INTERVAL_MS);
      refresh().catch((err) => show(err.message));
    </script>
  </body>
</html>
"""

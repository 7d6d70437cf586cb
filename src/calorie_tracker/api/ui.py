"""Single-page chat UI served at the root path."""

CHAT_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Calorie Tracker</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      .hidden { display: none; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      button.active { font-weight: bold; }
      #messages { border: 1px solid #ddd; height: 260px; overflow: auto; }
      .user { text-align: right; color: #333; }
      .bot { color: #0a5; white-space: pre-line; }
      .stats span { margin-right: 1.5rem; }
      #chart { display: flex; align-items: flex-end; height: 160px; gap: 0.5rem; }
      .bar { flex: 1; text-align: center; font-size: 0.75rem; }
      .bar div { background: #4a90d9; margin-bottom: 0.25rem; }
    </style>
  </head>
  <body>
    <h1>Calorie Tracker</h1>
    <section id="login" class="row">
      <input id="userId" placeholder="User ID (min 3 characters)" />
      <button onclick="authenticate('/api/login')">Login</button>
      <button onclick="authenticate('/api/register')">Register</button>
      <p id="loginError"></p>
    </section>
    <section id="app" class="hidden">
      <p>User: <strong id="currentUser"></strong>
        <button onclick="logout()">Logout</button></p>
      <div class="row" id="mealTypes">
        <button data-meal="breakfast" class="active">Breakfast</button>
        <button data-meal="lunch">Lunch</button>
        <button data-meal="dinner">Dinner</button>
      </div>
      <div id="messages"></div>
      <div class="row">
        <input id="mealInput" placeholder="What did you eat?" />
        <button id="sendBtn" onclick="sendMeal()">Send</button>
      </div>
      <div class="row stats">
        <span>Total: <strong id="total">0</strong></span>
        <span>Breakfast: <strong id="breakfast">0</strong></span>
        <span>Lunch: <strong id="lunch">0</strong></span>
        <span>Dinner: <strong id="dinner">0</strong></span>
      </div>
      <div id="chart"></div>
    </section>
    <script>
      let mealType = 'breakfast';

      async function post(path, body) {
        const res = await fetch(path, {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify(body)
        });
        return res.json();
      }

      async function authenticate(path) {
        const userId = document.getElementById('userId').value.trim();
        const data = await post(path, { userId });
        if (!data.success) {
          document.getElementById('loginError').textContent = data.error;
          return;
        }
        localStorage.setItem('userId', data.userId);
        showApp();
      }

      function logout() {
        localStorage.removeItem('userId');
        document.getElementById('app').classList.add('hidden');
        document.getElementById('login').classList.remove('hidden');
      }

      function addMessage(text, kind) {
        const box = document.getElementById('messages');
        const p = document.createElement('p');
        p.className = kind;
        p.textContent = text;
        box.appendChild(p);
        box.scrollTop = box.scrollHeight;
      }

      function render(dashboard) {
        for (const key of ['total', 'breakfast', 'lunch', 'dinner']) {
          document.getElementById(key).textContent =
            dashboard.today[key].toLocaleString();
        }
        const chart = document.getElementById('chart');
        chart.innerHTML = '';
        const peak = Math.max(1, ...dashboard.week.map(d => d.calories));
        for (const day of dashboard.week) {
          const bar = document.createElement('div');
          bar.className = 'bar';
          const fill = document.createElement('div');
          fill.style.height = Math.round((day.calories / peak) * 120) + 'px';
          fill.title = day.calories + ' kcal';
          bar.appendChild(fill);
          bar.appendChild(document.createTextNode(day.label));
          chart.appendChild(bar);
        }
      }

      async function showApp() {
        const userId = localStorage.getItem('userId');
        document.getElementById('currentUser').textContent = userId;
        document.getElementById('login').classList.add('hidden');
        document.getElementById('app').classList.remove('hidden');
        const data = await post('/api/dashboard', { userId });
        if (data.success) render(data);
      }

      async function sendMeal() {
        const input = document.getElementById('mealInput');
        const meal = input.value.trim();
        if (!meal) return;
        const label = mealType.charAt(0).toUpperCase() + mealType.slice(1);
        addMessage('[' + label + '] ' + meal, 'user');
        input.value = '';
        document.getElementById('sendBtn').disabled = true;
        try {
          const userId = localStorage.getItem('userId');
          const data = await post('/api/log-meal', { userId, meal, mealType });
          if (!data.success) {
            addMessage('Sorry, I encountered an error: ' + data.error, 'bot');
            return;
          }
          const lines = [meal + ': about ' + data.calories + ' kcal'];
          for (const item of data.breakdown) lines.push(' - ' + item);
          addMessage(lines.join('\\n'), 'bot');
          render(data.dashboard);
        } catch (err) {
          addMessage("Sorry, I couldn't connect to the server.", 'bot');
        } finally {
          document.getElementById('sendBtn').disabled = false;
        }
      }

      document.querySelectorAll('#mealTypes button').forEach(btn => {
        btn.addEventListener('click', () => {
          document.querySelectorAll('#mealTypes button')
            .forEach(b => b.classList.remove('active'));
          btn.classList.add('active');
          mealType = btn.dataset.meal;
        });
      });
      document.getElementById('mealInput').addEventListener('keypress', e => {
        if (e.key === 'Enter') sendMeal();
      });
      if (localStorage.getItem('userId')) showApp();
    </script>
  </body>
</html>
"""
